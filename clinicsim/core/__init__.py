"""Core simulation engine components."""

from clinicsim.core.clock import Clock
from clinicsim.core.event import Event, EventKind
from clinicsim.core.event_heap import EventHeap
from clinicsim.core.scheduler import EventScheduler, Handler, Observer
from clinicsim.core.temporal import TICKS_PER_UNIT, Instant

__all__ = [
    "Clock",
    "Event",
    "EventHeap",
    "EventKind",
    "EventScheduler",
    "Handler",
    "Instant",
    "Observer",
    "TICKS_PER_UNIT",
]
