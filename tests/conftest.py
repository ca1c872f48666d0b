"""Test configuration and fixtures for ZapScan."""

import tempfile
from collections.abc import Generator
from pathlib import Path

import pytest
from bs4 import BeautifulSoup

from zapscan.db.init import init_db
from zapscan.db.models import Scan
from zapscan.modules.storage import StorageManager

FULL_SECURITY_HEADERS = {
    "Content-Type": "text/html; charset=utf-8",
    "X-Frame-Options": "DENY",
    "Content-Security-Policy": "default-src 'self'",
    "X-Content-Type-Options": "nosniff",
    "Strict-Transport-Security": "max-age=31536000; includeSubDomains",
    "X-XSS-Protection": "1; mode=block",
}

MINIMAL_PAGE = "<html><head><title>Welcome</title></head><body><p>Hello</p></body></html>"


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def project_dir(temp_dir: Path) -> Path:
    """Create a mock project directory structure."""
    project_path = temp_dir / "test_project"
    project_path.mkdir()
    (project_path / ".zapscan").mkdir()
    (project_path / "report").mkdir()
    return project_path


@pytest.fixture
def db_path(project_dir: Path) -> Path:
    """Return the database path for a project."""
    return project_dir / ".zapscan" / "zapscan.db"


@pytest.fixture
def initialized_db(db_path: Path) -> Path:
    """Initialize the database and return its path."""
    init_db(db_path)
    return db_path


@pytest.fixture
def storage(initialized_db: Path) -> Generator[StorageManager, None, None]:
    """Create a storage manager with an initialized database."""
    manager = StorageManager(initialized_db)
    yield manager
    manager.close()


@pytest.fixture
def pending_scan(storage: StorageManager) -> Scan:
    """Create a pending quick scan."""
    return storage.create_scan("https://example.com", "quick")


@pytest.fixture
def soup_of():
    """Parse an HTML snippet the way the scanner does."""

    def _parse(html: str) -> BeautifulSoup:
        return BeautifulSoup(html, "html.parser")

    return _parse


@pytest.fixture
def vulnerable_page() -> str:
    """Return a page that trips most body inspectors."""
    return """<html>
    <head>
        <meta http-equiv="Refresh" content="5; url=/home">
        <script src="http://cdn.example.com/jquery-1.12.4.min.js"></script>
        <script>var debug = true;</script>
    </head>
    <body onload="init()">
        <!-- TODO: remove the admin password before release -->
        <a href="javascript:void(0)">Menu</a>
        <a href="/login?redirect=/account">Account</a>
        <form action="/login" method="POST">
            <input name="username" />
            <input type="password" name="password" />
        </form>
        <div>Fatal error: Uncaught exception in /var/www/index.php</div>
    </body>
</html>"""


@pytest.fixture
def security_headers() -> dict[str, str]:
    """Return a complete set of security headers."""
    return dict(FULL_SECURITY_HEADERS)


@pytest.fixture
def minimal_page() -> str:
    """Return a page with no scripts, forms or comments."""
    return MINIMAL_PAGE
