"""
Event supplier reading booked events from a YAML or JSON file.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

import yaml

from ..domain.exceptions import EventSourceError
from ..domain.models import END_OF_DAY, Event, TimeSpan, parse_clock

logger = logging.getLogger(__name__)


class EventFileClient:
    """
    Client that loads booked events from a calendar file.

    The file holds either a list of event records or a mapping with an
    ``events`` key. Each record looks like::

        name: Standup
        start: "09:00"
        end: "09:15"
        attendees: [alice@example.com, bob@example.com]

    ``start`` and ``end`` are ``HH:MM`` strings or minute offsets. An end of
    ``"24:00"`` or ``end_of_day: true`` books the span through the last
    minute of the day.
    """

    def __init__(self, events_file: Path, strict: bool = False):
        """
        Initialize the client.

        Args:
            events_file: Path to the YAML/JSON events file
            strict: Raise on malformed records instead of skipping them
        """
        self.events_file = Path(events_file)
        self.strict = strict
        self._events: Optional[List[Event]] = None

    async def get_events(self, attendees: Optional[Iterable[str]] = None) -> List[Event]:
        """
        Return the booked events, optionally only those involving ``attendees``.

        Raises:
            EventSourceError: If the file is missing or cannot be parsed
        """
        events = self.load_events()
        if attendees is None:
            return list(events)

        people = set(attendees)
        return [event for event in events if event.involves(people)]

    def load_events(self) -> List[Event]:
        """Load and cache all events from the file."""
        if self._events is None:
            self._events = self._parse_records(self._read_records())
            logger.info("Loaded %d events from %s", len(self._events), self.events_file)
        return self._events

    def _read_records(self) -> List[Dict[str, Any]]:
        if not self.events_file.exists():
            raise EventSourceError(f"Events file not found: {self.events_file}")

        try:
            with open(self.events_file, "r", encoding="utf-8") as f:
                if self.events_file.suffix.lower() == ".json":
                    data = json.load(f)
                else:
                    data = yaml.safe_load(f)
        except (json.JSONDecodeError, yaml.YAMLError) as exc:
            raise EventSourceError(f"Invalid events file {self.events_file}: {exc}") from exc

        if data is None:
            return []
        if isinstance(data, dict):
            data = data.get("events") or []
        if not isinstance(data, list):
            raise EventSourceError(
                f"Events file {self.events_file} must contain a list of events"
            )
        return data

    def _parse_records(self, records: List[Any]) -> List[Event]:
        events: List[Event] = []

        for position, record in enumerate(records, 1):
            try:
                events.append(self.parse_event(record))
            except (KeyError, TypeError, ValueError) as exc:
                if self.strict:
                    raise EventSourceError(
                        f"Invalid event #{position} in {self.events_file}: {exc}"
                    ) from exc
                logger.warning("Skipping invalid event #%d in %s: %s", position, self.events_file, exc)

        return events

    @staticmethod
    def parse_event(record: Dict[str, Any]) -> Event:
        """
        Build an :class:`Event` from a raw record.

        Raises:
            KeyError: If a required field is missing
            ValueError: If a time or span is invalid
        """
        if not isinstance(record, dict):
            raise TypeError(f"Event record must be a mapping, got {type(record).__name__}")

        start = _parse_offset(record["start"])
        if record.get("end_of_day"):
            when = TimeSpan(start=start, end=END_OF_DAY, inclusive=True)
        else:
            when = TimeSpan(start=start, end=_parse_offset(record["end"]))

        attendees = record.get("attendees") or []
        if isinstance(attendees, str):
            attendees = [attendees]

        return Event(
            name=str(record.get("name", "")),
            when=when,
            attendees=frozenset(str(person) for person in attendees),
        )


def _parse_offset(value: Any) -> int:
    """Convert a clock string or minute count into a minute offset."""
    if isinstance(value, bool):
        raise ValueError(f"Invalid time value: {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        return parse_clock(value)
    raise ValueError(f"Invalid time value: {value!r}")
