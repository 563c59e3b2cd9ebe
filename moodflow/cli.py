"""
Local-mode command line journal.

Entries live in a JSON file (see ``Settings.local_data_file``); each command
loads it once and commands that add entries rewrite it in full.
"""
from datetime import date, datetime
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.table import Table

from moodflow.core.config import settings
from moodflow.core.exceptions import StorageError
from moodflow.core.time_utils import local_today
from moodflow.models.enums import MOOD_COLORS, MOOD_EMOJIS, MOOD_ORDER, MoodType
from moodflow.services.stats_service import compute_stats, entry_day
from moodflow.stores import LocalEntryStore, create_entry

console = Console()

MOOD_CHOICES = [mood.value for mood in MOOD_ORDER]


def format_relative_day(day: date, today: date) -> str:
    """'Today', 'Yesterday', 'N days ago' within a week, else 'Oct 5'."""
    delta = (today - day).days
    if delta == 0:
        return "Today"
    if delta == 1:
        return "Yesterday"
    if 1 < delta < 7:
        return f"{delta} days ago"
    return f"{day:%b} {day.day}"


def format_time(ts: datetime) -> str:
    """12-hour clock without a leading zero, e.g. '9:05 PM'."""
    return ts.strftime("%I:%M %p").lstrip("0")


def _mood_label(mood: MoodType) -> str:
    mood = MoodType(mood)
    return f"[{MOOD_COLORS[mood]}]{MOOD_EMOJIS[mood]} {mood.value.capitalize()}[/]"


def _open_store(ctx: click.Context) -> LocalEntryStore:
    store = ctx.obj
    try:
        store.load()
    except StorageError as exc:
        raise click.ClickException(exc.message) from exc
    return store


@click.group()
@click.option(
    "--data-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="JSON file holding the journal (defaults to the LOCAL_DATA_FILE setting).",
)
@click.pass_context
def cli(ctx: click.Context, data_file: Optional[Path]):
    """Record your mood and see how it changes."""
    ctx.obj = LocalEntryStore(data_file or settings.local_data_file)


@cli.command()
@click.argument("mood", type=click.Choice(MOOD_CHOICES, case_sensitive=False))
@click.option("-n", "--note", default=None, help="Optional note for this entry")
@click.pass_context
def add(ctx: click.Context, mood: str, note: Optional[str]):
    """Record a mood."""
    store = _open_store(ctx)
    entry = store.append(create_entry(MoodType(mood.lower()), note))
    try:
        store.save()
    except StorageError as exc:
        raise click.ClickException(exc.message) from exc
    console.print(f"Recorded {_mood_label(entry.mood)} at {format_time(entry.timestamp)}")


@cli.command()
@click.option("-l", "--limit", default=3, show_default=True, type=click.IntRange(min=1), help="Entries to show")
@click.pass_context
def recent(ctx: click.Context, limit: int):
    """Show the latest entries."""
    entries = _open_store(ctx).recent(limit)
    if not entries:
        console.print("[yellow]No entries yet. Use 'moodflow add' to record one.[/]")
        return

    today = local_today()
    table = Table(show_header=True, title="Recent entries")
    table.add_column("Day", style="dim")
    table.add_column("Time", style="dim")
    table.add_column("Mood")
    table.add_column("Note")

    for entry in entries:
        table.add_row(
            format_relative_day(entry_day(entry.timestamp), today),
            format_time(entry.timestamp),
            _mood_label(entry.mood),
            entry.note or "",
        )

    console.print(table)


@cli.command()
@click.pass_context
def stats(ctx: click.Context):
    """Show distribution, streak and the seven-day trend."""
    entries = _open_store(ctx).list_all()
    summary = compute_stats(entries, local_today())

    console.print(f"[bold]Total entries:[/] {summary.total_entries}")
    console.print(f"[bold]Most common mood:[/] {_mood_label(summary.average_mood)}")
    console.print(f"[bold]Current streak:[/] {summary.streak_count} day(s)")
    console.print(f"[bold]This week:[/] {summary.this_week} entries")

    distribution = Table(show_header=True, title="Mood distribution")
    distribution.add_column("Mood")
    distribution.add_column("Count", justify="right")
    distribution.add_column("Share", justify="right")
    distribution.add_column("")
    for mood in MOOD_ORDER:
        count = summary.mood_distribution[mood]
        distribution.add_row(
            _mood_label(mood),
            str(count),
            f"{summary.mood_percentages[mood]}%",
            f"[{MOOD_COLORS[mood]}]{'█' * min(count, 40)}[/]",
        )
    console.print(distribution)

    trend = Table(show_header=True, title="Last 7 days")
    trend.add_column("Day")
    trend.add_column("Date", style="dim")
    trend.add_column("Score", justify="right")
    for bucket in summary.weekly_data:
        bar = "█" * bucket.score if bucket.score else "[dim]-[/]"
        trend.add_row(bucket.day, bucket.date.isoformat(), f"{bucket.score} {bar}")
    console.print(trend)


@cli.command()
@click.option("--host", default="127.0.0.1", show_default=True)
@click.option("--port", default=8000, show_default=True, type=int)
@click.option("--reload", is_flag=True, help="Restart on code changes")
def serve(host: str, port: int, reload: bool):
    """Run the REST API."""
    import uvicorn

    uvicorn.run("moodflow.main:app", host=host, port=port, reload=reload)


def main():
    cli()


if __name__ == "__main__":
    main()
