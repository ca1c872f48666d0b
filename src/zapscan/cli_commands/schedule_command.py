"""Scheduled scan CLI command."""

import asyncio

import typer
from rich.table import Table

from .deps import cli_module
from .shared import app, console, format_timestamp, open_store

ACTIONS = ("add", "list", "remove", "enable", "disable", "run")


@app.command()
def schedule(
    action: str = typer.Argument("list", help=f"Action: {', '.join(ACTIONS)}"),
    target: str | None = typer.Argument(None, help="URL for 'add', schedule id otherwise"),
    frequency: str = typer.Option(
        "daily",
        "--frequency",
        "-f",
        help="daily, weekly, monthly, quarterly, annually",
    ),
    time: str = typer.Option("00:00", "--time", help="Local wall-clock time HH:MM"),
    once: bool = typer.Option(False, "--once", help="With 'run': one tick, then exit"),
) -> None:
    """Manage recurring quick scans and run the scheduler."""
    if action not in ACTIONS:
        console.print(f"[red]Unknown action: {action}. Use {', '.join(ACTIONS)}.[/red]")
        raise typer.Exit(1)

    cli = cli_module()
    project_dir = cli.require_project()
    try:
        tz = cli.get_schedule_timezone(project_dir)
    except ValueError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(1) from exc

    store = open_store(project_dir)
    try:
        if action == "list":
            _list_schedules(store)
        elif action == "run":
            _run(cli, project_dir, store, once, tz)
        elif not target:
            console.print(f"[red]'schedule {action}' needs a {_target_name(action)}.[/red]")
            raise typer.Exit(1)
        elif action == "add":
            _add(store, target, frequency, time, tz)
        else:
            _change(store, action, target, tz)
    finally:
        store.close()


def _target_name(action: str) -> str:
    return "target URL" if action == "add" else "schedule id"


def _find_schedule(store, schedule_id: str):
    entry = store.get_scheduled_scan(schedule_id)
    if entry is not None:
        return entry
    matches = [s for s in store.get_all_scheduled_scans() if s.id.startswith(schedule_id)]
    if len(matches) == 1:
        return matches[0]
    console.print(f"[red]Schedule not found: {schedule_id}[/red]")
    raise typer.Exit(1)


def _add(store, target_url: str, frequency: str, time: str, tz) -> None:
    try:
        entry = store.create_scheduled_scan(target_url, frequency, time, tz=tz)
    except ValueError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(1) from exc
    console.print(
        f"[green]Scheduled {entry.frequency} scan of {entry.target_url}[/green] "
        f"(id {entry.id[:8]}, next run {format_timestamp(entry.next_run)})"
    )


def _change(store, action: str, schedule_id: str, tz) -> None:
    entry = _find_schedule(store, schedule_id)
    if action == "remove":
        store.delete_scheduled_scan(entry.id)
        console.print(f"[green]Removed schedule {entry.id}[/green]")
        return
    entry = store.update_scheduled_scan(entry.id, tz=tz, enabled=action == "enable")
    console.print(
        f"[green]Schedule {entry.id[:8]} {action}d[/green] "
        f"(next run {format_timestamp(entry.next_run)})"
    )


def _list_schedules(store) -> None:
    entries = store.get_all_scheduled_scans()
    if not entries:
        console.print("[dim]No scheduled scans. Add one with 'zapscan schedule add <url>'.[/dim]")
        return

    table = Table(title="Scheduled Scans")
    table.add_column("ID")
    table.add_column("Target")
    table.add_column("Frequency")
    table.add_column("Time")
    table.add_column("Enabled")
    table.add_column("Last Run")
    table.add_column("Next Run")
    for entry in entries:
        table.add_row(
            entry.id[:8],
            entry.target_url,
            entry.frequency,
            entry.time,
            "[green]yes[/green]" if entry.enabled else "[dim]no[/dim]",
            format_timestamp(entry.last_run),
            format_timestamp(entry.next_run),
        )
    console.print(table)


async def _tick_once(scheduler) -> list:
    started = scheduler.tick()
    await scheduler.drain()
    return started


async def _run_forever(scheduler, interval: float) -> None:
    try:
        await scheduler.run(interval)
    finally:
        await scheduler.drain()


def _run(cli, project_dir, store, once: bool, tz) -> None:
    orchestrator = cli.ScanOrchestrator(
        store,
        timeout=cli.get_scan_timeout(project_dir),
        user_agent=cli.get_user_agent(project_dir),
        verify_tls=cli.get_verify_tls(project_dir),
    )
    scheduler = cli.ScanScheduler(store, orchestrator, tz=tz)

    if once:
        started = asyncio.run(_tick_once(scheduler))
        console.print(f"[green]Started {len(started)} scheduled scan(s).[/green]")
        return

    interval = cli.get_scheduler_interval(project_dir)
    console.print(f"[blue]Scheduler running every {interval:g}s. Press Ctrl+C to stop.[/blue]")
    try:
        asyncio.run(_run_forever(scheduler, interval))
    except KeyboardInterrupt:
        console.print("[yellow]Scheduler stopped.[/yellow]")
