"""
Domain layer - Pure business logic without external dependencies.
"""

from .exceptions import (
    EventSourceError,
    InvalidRequestError,
    InvalidTimeSpanError,
    SchedulingError,
)
from .meeting_scheduler import MeetingScheduler, ScheduleOptions
from .models import (
    DAY_LENGTH,
    END_OF_DAY,
    START_OF_DAY,
    WHOLE_DAY,
    Event,
    MeetingRequest,
    TimeSpan,
)

__all__ = [
    "DAY_LENGTH",
    "END_OF_DAY",
    "START_OF_DAY",
    "WHOLE_DAY",
    "Event",
    "EventSourceError",
    "InvalidRequestError",
    "InvalidTimeSpanError",
    "MeetingRequest",
    "MeetingScheduler",
    "ScheduleOptions",
    "SchedulingError",
    "TimeSpan",
]
