"""Scan history CLI command."""

import typer
from rich.table import Table

from .deps import cli_module
from .scan_helpers import print_scan_details, styled_status
from .shared import app, console, find_scan, format_timestamp, open_store


@app.command()
def scans(
    action: str = typer.Argument("list", help="Action: list, show, delete"),
    scan_id: str | None = typer.Argument(None, help="Scan id (or unique prefix)"),
    limit: int = typer.Option(20, "--limit", "-n", help="Number of scans to list"),
) -> None:
    """List, inspect or delete recorded scans."""
    cli = cli_module()
    store = open_store(cli.require_project())
    try:
        if action == "list":
            _list_scans(store, limit)
            return

        if action not in ("show", "delete"):
            console.print(f"[red]Unknown action: {action}. Use 'list', 'show', or 'delete'.[/red]")
            raise typer.Exit(1)
        if not scan_id:
            console.print(f"[red]'scans {action}' needs a scan id.[/red]")
            raise typer.Exit(1)

        record = find_scan(store, scan_id)
        if action == "show":
            print_scan_details(record, store.get_vulnerabilities_by_scan(record.id))
            return

        store.delete_scan(record.id)
        console.print(f"[green]Deleted scan {record.id}[/green]")
    finally:
        store.close()


def _list_scans(store, limit: int) -> None:
    records = store.get_recent_scans(limit)
    if not records:
        console.print("[dim]No scans yet. Run 'zapscan scan <url>'.[/dim]")
        return

    table = Table(title="Scans")
    table.add_column("ID")
    table.add_column("Target")
    table.add_column("Type")
    table.add_column("Status")
    table.add_column("Started")
    table.add_column("Findings", justify="right")
    for record in records:
        table.add_row(
            record.id[:8],
            record.target_url,
            record.scan_type,
            styled_status(record.status),
            format_timestamp(record.started_at),
            str(record.total_vulnerabilities or 0),
        )
    console.print(table)
