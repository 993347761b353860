"""
Core business logic for finding meeting slots.

Pure domain logic without any external dependencies (no API calls, no
database, no I/O).
"""

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from .interval_set import FreeTimeTable, filter_by_duration, new_table, subtract
from .models import Event, MeetingRequest, TimeSpan

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScheduleOptions:
    """
    Candidate slots for a request under both attendance policies.
    """
    mandatory: List[TimeSpan]
    optional: List[TimeSpan]

    @property
    def includes_optional(self) -> bool:
        """True when the chosen slots also suit every optional attendee."""
        return bool(self.optional)

    @property
    def chosen(self) -> List[TimeSpan]:
        """The optional-inclusive slots if any exist, else the mandatory-only ones."""
        return self.optional if self.optional else self.mandatory


class MeetingScheduler:
    """
    Finds the spans of the day in which a meeting can take place.

    Algorithm:
    1. Start two free-time tables covering the whole day, one for the
       mandatory attendees and one for mandatory plus optional attendees
    2. Subtract every event from the tables of the attendees it involves
    3. Keep the free spans long enough for the meeting
    4. Prefer the slots that suit optional attendees too, falling back to
       the mandatory-only slots when there are none
    """

    def query(
        self,
        events: Optional[Iterable[Event]],
        request: Optional[MeetingRequest],
    ) -> Optional[List[TimeSpan]]:
        """
        Find the available slots for a meeting request.

        Args:
            events: Booked events; ``None`` is treated as no events
            request: The meeting to place

        Returns:
            Slots sorted by start, empty when nothing fits, or ``None`` when
            there is no request to answer
        """
        options = self.find_schedules(events, request)
        if options is None:
            return None
        return options.chosen

    def find_schedules(
        self,
        events: Optional[Iterable[Event]],
        request: Optional[MeetingRequest],
    ) -> Optional[ScheduleOptions]:
        """Compute the candidate slots under both policies."""
        if request is None:
            return None

        mandatory_table, optional_table = self._register_relevant_events(
            events or (),
            request,
        )

        options = ScheduleOptions(
            mandatory=filter_by_duration(mandatory_table, request.duration),
            optional=filter_by_duration(optional_table, request.duration),
        )
        logger.debug(
            "Request for %d min: %d mandatory-only and %d optional-inclusive slots",
            request.duration,
            len(options.mandatory),
            len(options.optional),
        )
        return options

    @staticmethod
    def _register_relevant_events(
        events: Iterable[Event],
        request: MeetingRequest,
    ) -> Tuple[FreeTimeTable, FreeTimeTable]:
        """
        Subtract each event from the free-time tables it is relevant to.

        An attendee listed as both mandatory and optional counts as mandatory.
        """
        mandatory_table = new_table()
        optional_table = new_table()

        for event in events:
            relevant_to_mandatory = event.involves(request.attendees)

            if relevant_to_mandatory:
                mandatory_table = subtract(mandatory_table, event.when)
                optional_table = subtract(optional_table, event.when)
            elif event.involves(request.optional_attendees):
                optional_table = subtract(optional_table, event.when)
            else:
                logger.debug("Ignoring event %r, no requested attendee", event.name)

        return mandatory_table, optional_table
