"""
Domain models for time spans, events and meeting requests.

All instants are minute offsets within a single day window. The last minute
of the day is a closed endpoint, every other span end is exclusive; the
``inclusive`` flag on :class:`TimeSpan` folds that difference into a single
effective end (``stop``) used by every comparison.
"""

from dataclasses import dataclass, field
from typing import FrozenSet, Iterable

import pendulum

from .exceptions import InvalidRequestError, InvalidTimeSpanError

START_OF_DAY = 0
END_OF_DAY = 24 * 60 - 1
DAY_LENGTH = 24 * 60


def minutes_of_day(hours: int, minutes: int = 0) -> int:
    """Return the offset in minutes of a wall-clock time within the day."""
    return hours * 60 + minutes


def parse_clock(value: str) -> int:
    """
    Parse a ``HH:mm`` clock string into a minute offset.

    ``"24:00"`` is accepted and maps to the end of the day window.

    Raises:
        ValueError: If the string is not a valid clock time
    """
    text = value.strip()
    if text == "24:00":
        return DAY_LENGTH

    try:
        parsed = pendulum.from_format(text, "HH:mm")
    except ValueError as exc:
        raise ValueError(f"Invalid clock time '{value}', expected HH:MM") from exc

    return minutes_of_day(parsed.hour, parsed.minute)


def format_clock(offset: int) -> str:
    """Format a minute offset as ``HH:mm``."""
    hours, minutes = divmod(offset, 60)
    return f"{hours:02d}:{minutes:02d}"


@dataclass(frozen=True, eq=False)
class TimeSpan:
    """
    Represents an immutable span of minutes within the day.

    Invariant: the span has a positive duration.
    """
    start: int
    end: int
    inclusive: bool = False

    def __post_init__(self):
        if self.stop <= self.start:
            raise InvalidTimeSpanError(
                f"Start {self.start} must be before end {self.end}"
                f"{' (inclusive)' if self.inclusive else ''}"
            )

    @classmethod
    def from_start_end(cls, start: int, end: int, inclusive: bool = False) -> "TimeSpan":
        return cls(start=start, end=end, inclusive=inclusive)

    @classmethod
    def from_start_duration(cls, start: int, duration: int) -> "TimeSpan":
        return cls(start=start, end=start + duration)

    @property
    def stop(self) -> int:
        """Effective exclusive end of the span."""
        return self.end + 1 if self.inclusive else self.end

    @property
    def duration(self) -> int:
        """Return the duration in minutes."""
        return self.stop - self.start

    def overlaps(self, other: "TimeSpan") -> bool:
        """Check if this span overlaps with another."""
        return self.start < other.stop and other.start < self.stop

    def contains(self, other: "TimeSpan") -> bool:
        """Check if the other span lies entirely within this one."""
        return self.start <= other.start and other.stop <= self.stop

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TimeSpan):
            return NotImplemented
        return (self.start, self.stop) == (other.start, other.stop)

    def __hash__(self) -> int:
        return hash((self.start, self.stop))

    def __repr__(self) -> str:
        return f"TimeSpan(start={self.start}, stop={self.stop})"

    def format_display(self) -> str:
        """
        Format the span for display.
        Format: HH:MM – HH:MM (N min)
        """
        return f"{format_clock(self.start)} – {format_clock(self.stop)} ({self.duration} min)"


WHOLE_DAY = TimeSpan(start=START_OF_DAY, end=END_OF_DAY, inclusive=True)


@dataclass(frozen=True)
class Event:
    """
    A previously booked event occupying its attendees for a span of the day.
    """
    name: str
    when: TimeSpan
    attendees: FrozenSet[str] = field(default_factory=frozenset)

    def __post_init__(self):
        object.__setattr__(self, "attendees", frozenset(self.attendees))

    def involves(self, people: Iterable[str]) -> bool:
        """Check whether any of the given people attends this event."""
        return not self.attendees.isdisjoint(people)


@dataclass(frozen=True)
class MeetingRequest:
    """
    A request for a meeting of a given length.

    Mandatory attendees must all be free; optional attendees are honoured
    only when that still leaves a slot.
    """
    attendees: FrozenSet[str] = field(default_factory=frozenset)
    duration: int = 30
    optional_attendees: FrozenSet[str] = field(default_factory=frozenset)

    def __post_init__(self):
        if self.duration < 0:
            raise InvalidRequestError(f"Duration must not be negative, got {self.duration}")
        object.__setattr__(self, "attendees", frozenset(self.attendees))
        object.__setattr__(self, "optional_attendees", frozenset(self.optional_attendees))

    def with_optional(self, *people: str) -> "MeetingRequest":
        """Return a copy of this request with additional optional attendees."""
        return MeetingRequest(
            attendees=self.attendees,
            duration=self.duration,
            optional_attendees=self.optional_attendees | frozenset(people),
        )
