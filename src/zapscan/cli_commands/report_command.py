"""Report export CLI command."""

import typer

from .deps import cli_module
from .shared import app, console, find_scan, open_store


@app.command()
def report(
    scan_id: str = typer.Argument(..., help="Scan id (or unique prefix)"),
    format: str = typer.Option("json", "--format", help="Report format: json, html"),
    include_remediation: bool = typer.Option(
        True,
        "--include-remediation/--no-remediation",
        help="Include remediation guidance",
    ),
) -> None:
    """Export a scan report into the project's report/ directory."""
    cli = cli_module()
    project_dir = cli.require_project()

    from zapscan.modules.report import ReportConfig

    store = open_store(project_dir)
    try:
        record = find_scan(store, scan_id)
        console.print(f"[blue]Generating {format.upper()} report...[/blue]")
        generator = cli.ReportGenerator(store, cli.get_report_dir(project_dir))
        config = ReportConfig(format=format, include_remediation=include_remediation)
        try:
            report_file = generator.export(record.id, config)
        except ValueError as exc:
            console.print(f"[red]Report generation failed: {exc}[/red]")
            raise typer.Exit(1) from exc
    finally:
        store.close()

    console.print(f"[green]Report generated:[/green] {report_file}")
