"""Shared CLI app objects and project helpers."""

import logging
import tempfile
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler

from zapscan.config import is_global_config_dir, is_verbose
from zapscan.utils.timeutil import ensure_utc

from .deps import cli_module

app = typer.Typer(
    name="zapscan",
    help="Passive single-page web vulnerability scanner",
    no_args_is_help=True,
)
console = Console()


def configure_logging(verbose: bool) -> None:
    """Route library logging through rich; DEBUG when verbose."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=verbose, show_path=False)],
        force=True,
    )


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Passive single-page web vulnerability scanner."""
    configure_logging(verbose or is_verbose(get_project_dir()))


def get_project_dir() -> Path | None:
    """Find the project directory by looking for a .zapscan marker.

    Stops walking at the system temp root (e.g. ``/tmp``) to avoid
    matching stale ``.zapscan`` dirs left by test runs or throwaway work.
    """
    current = Path.cwd()
    try:
        temp_root = Path(tempfile.gettempdir()).resolve()
    except OSError:
        temp_root = None
    while current != current.parent:
        if temp_root and current.resolve() == temp_root:
            return None
        marker = current / ".zapscan"
        if marker.exists():
            if (
                marker.is_dir()
                and is_global_config_dir(marker)
                and not (marker / "zapscan.db").exists()
            ):
                current = current.parent
                continue
            return current
        current = current.parent
    return None


def require_project() -> Path:
    """Ensure the current directory is inside a ZapScan project."""
    project_dir = cli_module().get_project_dir()
    if project_dir:
        return project_dir

    home_marker = Path.home() / ".zapscan"
    if (
        home_marker.is_dir()
        and is_global_config_dir(home_marker)
        and not (home_marker / "zapscan.db").exists()
    ):
        console.print(
            "[yellow]Note:[/yellow] ~/.zapscan is a global config folder, not a project marker."
        )
    console.print("[red]Error: Not in a zapscan project. Run 'zapscan init' first.[/red]")
    raise typer.Exit(1)


def open_store(project_dir: Path):
    """Open the project's StorageManager or exit when storage is missing."""
    cli = cli_module()
    db_path = cli.get_project_db_path(project_dir)
    if db_path is None or not db_path.exists():
        console.print("[red]Project storage not found. Run 'zapscan init' first.[/red]")
        raise typer.Exit(1)
    return cli.StorageManager(db_path)


def find_scan(store, scan_id: str):
    """Resolve a scan by full id or unique id prefix, or exit."""
    scan = store.get_scan(scan_id)
    if scan is not None:
        return scan
    matches = [scan for scan in store.get_all_scans() if scan.id.startswith(scan_id)]
    if len(matches) == 1:
        return matches[0]
    if matches:
        console.print(f"[red]Scan id prefix is ambiguous: {scan_id}[/red]")
    else:
        console.print(f"[red]Scan not found: {scan_id}[/red]")
    raise typer.Exit(1)


def format_timestamp(value) -> str:
    if value is None:
        return "-"
    return ensure_utc(value).strftime("%Y-%m-%d %H:%M UTC")
