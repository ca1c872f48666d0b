"""HTTP client used for the single page fetch of a scan."""

import time
from dataclasses import dataclass

import httpx

DEFAULT_TIMEOUT = 30.0
DEFAULT_USER_AGENT = "ZAP-Scanner/1.0"


@dataclass
class HTTPResponse:
    """Represents an HTTP response."""

    url: str
    status_code: int
    headers: dict[str, str]
    body: str
    response_time: float
    content_type: str = ""

    @property
    def is_markup(self) -> bool:
        """True when the body is text that can be parsed as HTML/XML."""
        content_type = self.content_type.lower()
        if not content_type:
            return bool(self.body)
        if "json" in content_type:
            return False
        return content_type.startswith("text/") or "html" in content_type or "xml" in content_type


class HTTPClient:
    """Async HTTP client that accepts any status code as a response."""

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        follow_redirects: bool = True,
        verify_ssl: bool = False,
        user_agent: str = DEFAULT_USER_AGENT,
    ):
        self.timeout = timeout
        self.follow_redirects = follow_redirects
        self.verify_ssl = verify_ssl
        self.user_agent = user_agent
        self.client: httpx.AsyncClient | None = None

    async def __aenter__(self):
        self.client = httpx.AsyncClient(
            timeout=self.timeout,
            follow_redirects=self.follow_redirects,
            verify=self.verify_ssl,
            headers={"User-Agent": self.user_agent},
        )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        if self.client:
            await self.client.aclose()

    async def get(
        self,
        url: str,
        headers: dict[str, str] | None = None,
    ) -> HTTPResponse:
        """Make a GET request.

        HTTP error statuses are returned like any other response; only transport
        failures (DNS, refused connections, timeouts) raise ``httpx.HTTPError``.
        """
        if not self.client:
            raise RuntimeError("Client not initialized. Use async context manager.")

        start = time.time()
        response = await self.client.get(url, headers=headers)
        elapsed = time.time() - start

        return HTTPResponse(
            url=str(response.url),
            status_code=response.status_code,
            headers=dict(response.headers),
            body=response.text,
            response_time=elapsed,
            content_type=response.headers.get("content-type", ""),
        )
