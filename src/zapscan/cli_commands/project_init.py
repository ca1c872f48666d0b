"""Project initialization CLI command."""

from pathlib import Path

import typer
from rich.panel import Panel

from .deps import cli_module
from .shared import app, console


@app.command()
def init() -> None:
    """Initialize a new scan project in the current directory."""
    project_dir = Path.cwd()
    zapscan_dir = project_dir / ".zapscan"

    if zapscan_dir.exists():
        console.print(f"[yellow]Project already initialized at {project_dir}[/yellow]")
        return

    cli = cli_module()
    try:
        cli.get_report_dir(project_dir).mkdir(exist_ok=True)
        storage_dir = cli.ensure_project_storage_dir(project_dir)
    except PermissionError as exc:
        console.print(
            "[red]Error: Cannot write to this directory.[/red]\n"
            "[dim]Choose a writable location and run 'zapscan init' again.[/dim]"
        )
        raise typer.Exit(1) from exc

    store = cli.StorageManager(storage_dir / "zapscan.db")
    api_key = store.get_settings().api_key
    store.close()
    env_path = cli.create_project_config_template(project_dir)

    if storage_dir == zapscan_dir:
        storage_text = "  .zapscan/       - Config & database\n"
    else:
        storage_text = (
            "  .zapscan       - Project marker\n"
            f"  data/           - Config & database ({storage_dir})\n"
        )

    console.print(
        Panel(
            f"[green]Initialized ZapScan project at[/green]\n{project_dir}\n\n"
            f"[dim]Structure:[/dim]\n"
            f"{storage_text}"
            f"  report/         - Exported reports\n\n"
            f"[dim]API key:[/dim] {api_key}\n\n"
            f"[yellow]Next steps:[/yellow]\n"
            f"  1. Review settings: {env_path}\n"
            "  2. Run a scan: zapscan scan https://example.com\n"
            "  3. Export a report: zapscan report <scan id>",
            title="ZapScan",
            border_style="green",
        )
    )


@app.command()
def version() -> None:
    """Show the installed ZapScan version."""
    from importlib.metadata import PackageNotFoundError
    from importlib.metadata import version as pkg_version

    try:
        current_version = pkg_version("zapscan")
    except PackageNotFoundError:
        current_version = "0.0.0+unknown"

    console.print(f"ZapScan {current_version}")
