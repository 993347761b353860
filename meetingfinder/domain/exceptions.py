"""
Domain-specific exception hierarchy for the meeting finder application.
"""


class SchedulingError(Exception):
    """Base class for all application-level errors."""


class InvalidTimeSpanError(SchedulingError, ValueError):
    """Raised when a time span would have zero or negative duration."""


class InvalidRequestError(SchedulingError, ValueError):
    """Raised when a meeting request cannot be satisfied by construction."""


class EventSourceError(SchedulingError):
    """Raised when event data cannot be loaded or parsed."""
