"""Exception taxonomy for clinicsim.

Configuration and null-reference failures are fatal and abort a run.
QueueFull and QueueEmpty are recoverable: routing code catches them and
turns them into drop counts instead of letting them escape.
"""

from __future__ import annotations


class ClinicSimError(Exception):
    """Base class for every error raised by clinicsim."""


class InvalidConfiguration(ClinicSimError, ValueError):
    """A parameter is out of range (negative capacity, zero offices, ...)."""


class NullEntityReference(ClinicSimError, TypeError):
    """A handler or entity operation was invoked without a required entity."""


class SchedulingError(ClinicSimError, ValueError):
    """An event was scheduled with a negative delay or into the past."""


class QueueFull(ClinicSimError):
    """Raised by BoundedQueue.insert when the queue is at capacity."""

    def __init__(self, name: str, capacity: int):
        super().__init__(f"Queue '{name}' is full (capacity={capacity})")
        self.name = name
        self.capacity = capacity


class QueueEmpty(ClinicSimError):
    """Raised by BoundedQueue.remove_first when the queue holds nothing."""

    def __init__(self, name: str):
        super().__init__(f"Queue '{name}' is empty")
        self.name = name


def require(value, what: str):
    """Return ``value`` or raise NullEntityReference when it is None."""
    if value is None:
        raise NullEntityReference(f"{what} is required but was None")
    return value
