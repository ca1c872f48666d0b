"""Scan CLI command."""

import asyncio

import typer

from zapscan.modules.scanner.models import SCAN_TYPES

from .deps import cli_module
from .scan_helpers import print_scan_details
from .shared import app, console, open_store


@app.command()
def scan(
    url: str = typer.Argument(..., help="Target URL, e.g. https://example.com"),
    scan_type: str = typer.Option("quick", "--type", "-t", help="Scan type: quick, deep, full"),
) -> None:
    """Fetch a page once and report its security findings."""
    cli = cli_module()
    scan_type = scan_type.strip().lower()
    if scan_type not in SCAN_TYPES:
        console.print(f"[red]Unknown scan type: {scan_type}. Use {', '.join(SCAN_TYPES)}.[/red]")
        raise typer.Exit(1)

    project_dir = cli.require_project()
    store = open_store(project_dir)
    try:
        record = store.create_scan(url, scan_type)
        orchestrator = cli.ScanOrchestrator(
            store,
            timeout=cli.get_scan_timeout(project_dir),
            user_agent=cli.get_user_agent(project_dir),
            verify_tls=cli.get_verify_tls(project_dir),
        )

        console.print(f"[blue]Starting {scan_type} scan of {url}...[/blue]")
        asyncio.run(orchestrator.perform_scan(record.id, record.target_url, record.scan_type))

        result = store.get_scan(record.id)
        print_scan_details(result, store.get_vulnerabilities_by_scan(record.id))
    finally:
        store.close()

    if result.status == "failed":
        console.print("[red]Scan failed.[/red]")
        raise typer.Exit(1)
    console.print(f"[green]Scan complete. {result.total_vulnerabilities} findings.[/green]")
