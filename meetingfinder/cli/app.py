"""
Main CLI application using Typer.
"""

import asyncio
import json
from pathlib import Path
from typing import Annotated, List, Optional

import typer
from rich.console import Console
from rich.table import Table

from ..adapters.event_file_client import EventFileClient
from ..config import AppConfig, get_default_config_path
from ..domain.exceptions import SchedulingError
from ..domain.models import MeetingRequest, TimeSpan, format_clock
from ..logging import configure_logging
from ..services.meeting_finder import MeetingFinderService

app = typer.Typer(
    name="meetingfinder",
    help="Find the free spans of a day in which a meeting fits",
    add_completion=False
)

console = Console()

ConfigOption = Annotated[
    Optional[Path],
    typer.Option("--config", "-c", help="Path to config file. Defaults to ./config.yaml"),
]
EventsOption = Annotated[
    Optional[Path],
    typer.Option("--events", "-e", help="Events file (YAML or JSON). Overrides events_file from the config."),
]


def _load_config(config_file: Optional[Path]) -> AppConfig:
    """
    Load the configuration, falling back to defaults when no config file
    exists at the default location.
    """
    if config_file is not None:
        return AppConfig.load_from_yaml(config_file)

    config_path = get_default_config_path()
    if not config_path.exists():
        return AppConfig()
    return AppConfig.load_from_yaml(config_path)


def _events_client(config: AppConfig, events_file: Optional[Path], strict: bool = False) -> EventFileClient:
    path = events_file or config.events_file
    if path is None:
        console.print(
            "[bold red]Error:[/bold red] No events file given. "
            "Use --events or set events_file in the config."
        )
        raise typer.Exit(1)
    return EventFileClient(events_file=path, strict=strict)


def _span_payload(span: TimeSpan) -> dict:
    return {
        "start": format_clock(span.start),
        "end": format_clock(span.stop),
        "duration": span.duration,
    }


@app.command()
def find(
    attendees: Annotated[Optional[List[str]], typer.Argument(help="Mandatory attendees (aliases or emails).")] = None,
    optional: Annotated[Optional[List[str]], typer.Option("--optional", "-o", help="Optional attendee; repeat for several.")] = None,
    duration: Annotated[Optional[int], typer.Option("--duration", "-d", help="Meeting duration in minutes")] = None,
    events_file: EventsOption = None,
    config_file: ConfigOption = None,
    as_json: Annotated[bool, typer.Option("--json", help="Print the slots as JSON.")] = False,
    strict: Annotated[bool, typer.Option("--strict", help="Fail on malformed events instead of skipping them.")] = False,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging.")] = False,
):
    """
    Find the spans of the day in which all attendees are free.

    Optional attendees are included when a slot suits them too; otherwise
    only the mandatory attendees are considered.

    Examples:

        meetingfinder find alice bob --duration 60 --events events.yaml

        meetingfinder find alice -o carol --json
    """
    try:
        config = _load_config(config_file)
        configure_logging("DEBUG" if verbose else config.log_level)

        request = MeetingRequest(
            attendees=config.resolve_attendees(attendees or []),
            optional_attendees=config.resolve_attendees(optional or []),
            duration=duration if duration is not None else config.defaults.duration_minutes,
        )

        service = MeetingFinderService(event_source=_events_client(config, events_file, strict))
        options = asyncio.run(service.find_schedules(request))
    except (FileNotFoundError, ValueError, SchedulingError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    slots = options.chosen

    if as_json or config.defaults.output == "json":
        payload = {
            "includes_optional": options.includes_optional,
            "slots": [_span_payload(slot) for slot in slots],
        }
        typer.echo(json.dumps(payload, indent=2))
        return

    console.print()
    if not slots:
        console.print(
            "[yellow]⚠ No available slots found.[/yellow]\n"
            "Try a shorter duration or fewer attendees."
        )
        console.print()
        return

    console.print(f"[bold green]✓ {len(slots)} available slot(s) found:[/bold green]\n")
    for slot in slots:
        console.print(f"  {slot.format_display()}")

    if request.optional_attendees and not options.includes_optional:
        console.print("\n[yellow]Optional attendees could not be accommodated.[/yellow]")
    console.print()


@app.command()
def events(
    events_file: EventsOption = None,
    config_file: ConfigOption = None,
    attendee: Annotated[Optional[List[str]], typer.Option("--attendee", "-a", help="Only show events of this attendee.")] = None,
):
    """
    List the booked events.
    """
    try:
        config = _load_config(config_file)
        configure_logging(config.log_level)
        client = _events_client(config, events_file)
        people = config.resolve_attendees(attendee) if attendee else None
        booked = asyncio.run(client.get_events(attendees=people))
    except (FileNotFoundError, ValueError, SchedulingError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    if not booked:
        console.print("[yellow]No events found.[/yellow]")
        return

    table = Table(
        title="Booked events",
        show_header=True,
        header_style="bold cyan"
    )
    table.add_column("Event", style="bold yellow")
    table.add_column("Start")
    table.add_column("End")
    table.add_column("Attendees", style="dim")

    for event in sorted(booked, key=lambda e: e.when.start):
        table.add_row(
            event.name,
            format_clock(event.when.start),
            format_clock(event.when.stop),
            ", ".join(sorted(event.attendees))
        )

    console.print()
    console.print(table)
    console.print()


@app.command()
def attendees(
    config_file: ConfigOption = None,
):
    """
    List all configured attendee aliases.
    """
    try:
        config = _load_config(config_file)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    if not config.attendees:
        console.print("[yellow]No attendees defined in the config file.[/yellow]")
        return

    table = Table(
        title="Configured attendees",
        show_header=True,
        header_style="bold cyan"
    )
    table.add_column("Name (Alias)", style="bold yellow")
    table.add_column("E-Mail", style="dim")

    for attendee in config.attendees:
        table.add_row(attendee.display_name(), attendee.email)

    console.print()
    console.print(table)
    console.print()


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"\n[bold cyan]meetingfinder[/bold cyan] version [bold]{__version__}[/bold]\n")


if __name__ == "__main__":
    app()
