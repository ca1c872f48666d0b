"""Settings and dashboard statistics CLI commands."""

import typer

from .deps import cli_module
from .shared import app, console, open_store

_SETTING_FIELDS = {
    "scan-depth": "scan_depth",
    "auto-scan": "auto_scan",
    "email-notifications": "email_notifications",
}
_BOOLEAN_FIELDS = {"auto_scan", "email_notifications"}


def _parse_value(field: str, value: str):
    if field in _BOOLEAN_FIELDS:
        return value.strip().lower() in ("1", "true", "yes", "on")
    return value


@app.command()
def settings(
    action: str = typer.Argument("show", help="Action: show, set, regenerate-key"),
    name: str | None = typer.Argument(None, help=f"With 'set': {', '.join(_SETTING_FIELDS)}"),
    value: str | None = typer.Argument(None, help="With 'set': new value"),
) -> None:
    """Show or change application settings and the API key."""
    cli = cli_module()
    store = open_store(cli.require_project())
    try:
        if action == "show":
            current = store.get_settings()
            console.print("[bold]Settings:[/bold]")
            console.print(f"  Scan depth:          {current.scan_depth}")
            console.print(f"  Auto scan:           {current.auto_scan}")
            console.print(f"  Email notifications: {current.email_notifications}")
            console.print(f"  API key:             {current.api_key}")
        elif action == "regenerate-key":
            console.print(f"[green]New API key:[/green] {store.regenerate_api_key()}")
        elif action == "set":
            field = _SETTING_FIELDS.get(name or "")
            if field is None or value is None:
                names = "|".join(_SETTING_FIELDS)
                console.print(f"[red]Usage: zapscan settings set <{names}> <value>[/red]")
                raise typer.Exit(1)
            parsed = _parse_value(field, value)
            store.update_settings(**{field: parsed})
            console.print(f"[green]{name} set to {parsed}[/green]")
        else:
            console.print(
                f"[red]Unknown action: {action}. Use 'show', 'set', or 'regenerate-key'.[/red]"
            )
            raise typer.Exit(1)
    finally:
        store.close()


@app.command()
def stats() -> None:
    """Show dashboard totals and recent activity."""
    cli = cli_module()
    store = open_store(cli.require_project())
    try:
        totals = store.get_stats()
        recent = store.get_recent_scans(10)
    finally:
        store.close()

    from zapscan.modules.report import describe_last_scan, weekly_activity
    from zapscan.utils.timeutil import utc_now

    now = utc_now()
    console.print("[bold]ZapScan Statistics:[/bold]")
    console.print(f"  Total scans:           {totals['total_scans']}")
    console.print(f"  Completed scans:       {totals['completed_scans']}")
    console.print(f"  Failed scans:          {totals['failed_scans']}")
    console.print(f"  Active scans:          {totals['active_scans']}")
    console.print(f"  Total vulnerabilities: {totals['total_vulnerabilities']}")
    console.print(f"  Critical:              {totals['critical']}")
    console.print(f"  Scheduled scans:       {totals['scheduled_scans']}")
    console.print(f"  Last scan:             {describe_last_scan(recent, now)}")

    activity = weekly_activity(recent, now)
    console.print("[bold]Last 7 days:[/bold]")
    for bucket in activity:
        console.print(
            f"  {bucket['day']}  scans: {bucket['scans']:>3}  "
            f"vulnerabilities: {bucket['vulnerabilities']:>4}"
        )
