"""
Application services for finding meeting slots.

The service coordinates fetching booked events via an event source adapter
and delegates the slot calculation to the domain-level ``MeetingScheduler``.
The CLI stays thin and the event dependency can be replaced by any object
satisfying a simple protocol.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Protocol

from ..domain.meeting_scheduler import MeetingScheduler, ScheduleOptions
from ..domain.models import Event, MeetingRequest, TimeSpan

logger = logging.getLogger(__name__)


class EventSourceProtocol(Protocol):
    """Protocol describing the event source behaviour needed by the service."""

    async def get_events(self, attendees: Optional[Iterable[str]] = None) -> List[Event]:
        """Return booked events, optionally restricted to the given attendees."""


class MeetingFinderService:
    """
    Orchestrates event retrieval and slot calculation.
    """

    def __init__(
        self,
        event_source: EventSourceProtocol,
        scheduler: Optional[MeetingScheduler] = None,
    ) -> None:
        self._event_source = event_source
        self._scheduler = scheduler or MeetingScheduler()

    async def find_slots(self, request: Optional[MeetingRequest]) -> Optional[List[TimeSpan]]:
        """
        Retrieve the relevant events and compute the available slots.
        """
        options = await self.find_schedules(request)
        if options is None:
            return None
        return options.chosen

    async def find_schedules(self, request: Optional[MeetingRequest]) -> Optional[ScheduleOptions]:
        """Like :meth:`find_slots`, but keep both attendance policies' results."""
        if request is None:
            logger.debug("No meeting request given")
            return None

        events = await self.fetch_events(request)
        return self._scheduler.find_schedules(events, request)

    async def fetch_events(self, request: MeetingRequest) -> List[Event]:
        """Fetch the events involving anyone invited to the meeting."""
        invited = request.attendees | request.optional_attendees
        events = await self._event_source.get_events(attendees=sorted(invited))

        logger.debug("Fetched %d events for %d invited attendees", len(events), len(invited))
        return list(events or [])
