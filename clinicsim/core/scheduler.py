"""The simulation kernel: future-event list, clock and dispatch loop.

EventScheduler pops events in non-decreasing time order (FIFO among equal
timestamps), advances the clock to each event's time and hands the event to
the handler registered for its kind. Handlers run to completion before the
next event is popped, so they never interleave.

A handler returns the identifiers of the entities its transition touched,
or None when the event turned out to change nothing (a wake-up that found no
idle resource or nobody waiting). Only transitions reach the observer.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Mapping
from itertools import count
from typing import TYPE_CHECKING, Optional, Union

from clinicsim.core.clock import Clock
from clinicsim.core.event import Event, EventKind
from clinicsim.core.event_heap import EventHeap
from clinicsim.core.temporal import Instant
from clinicsim.errors import InvalidConfiguration, SchedulingError

if TYPE_CHECKING:
    from clinicsim.entities.office import Office
    from clinicsim.entities.patient import Patient
    from clinicsim.entities.receptionist import Receptionist

logger = logging.getLogger(__name__)

Handler = Callable[[Event], Optional[tuple[str, ...]]]

Observer = Callable[[float, EventKind, tuple[str, ...]], None]
"""Signature of the observability hook: (time, kind, entity identifiers)."""


class EventScheduler:
    """Maintains the future-event list and drives the simulation clock.

    Args:
        handlers: One handler per EventKind member. Missing kinds are an
            InvalidConfiguration.
        start_time: Initial clock value.
        observer: Optional hook called after every dispatched event whose
            handler reported a transition.
    """

    def __init__(
        self,
        handlers: Mapping[EventKind, Handler],
        start_time: Instant = Instant.Epoch,
        observer: Optional[Observer] = None,
    ):
        missing = [kind for kind in EventKind if kind not in handlers]
        if missing:
            raise InvalidConfiguration(
                "No handler registered for event kinds: " + ", ".join(str(k) for k in missing)
            )
        self._handlers = dict(handlers)
        self._clock = Clock(start_time)
        self._heap = EventHeap()
        self._sequence = count()
        self._observer = observer
        self._events_dispatched = 0

    @property
    def now(self) -> Instant:
        return self._clock.now

    @property
    def pending(self) -> int:
        """Number of events still on the future-event list."""
        return self._heap.size()

    @property
    def events_dispatched(self) -> int:
        return self._events_dispatched

    def peek_time(self) -> Optional[Instant]:
        """Timestamp of the next event, or None if the list is empty."""
        if not self._heap.has_events():
            return None
        return self._heap.peek().time

    def schedule(
        self,
        kind: EventKind,
        delay: Union[int, float],
        *,
        patient: Optional[Patient] = None,
        receptionist: Optional[Receptionist] = None,
        office: Optional[Office] = None,
    ) -> Event:
        """Schedule an event ``delay`` time units after the current time.

        Raises:
            SchedulingError: If ``delay`` is negative or not a finite number.
        """
        if delay is None or not delay >= 0:
            raise SchedulingError(f"Cannot schedule {kind} with delay {delay!r}")
        return self.schedule_at(
            kind, self.now + delay, patient=patient, receptionist=receptionist, office=office
        )

    def schedule_at(
        self,
        kind: EventKind,
        at: Instant,
        *,
        patient: Optional[Patient] = None,
        receptionist: Optional[Receptionist] = None,
        office: Optional[Office] = None,
    ) -> Event:
        """Schedule an event at an absolute time that is not in the past."""
        if at < self.now or at.is_infinite():
            raise SchedulingError(f"Cannot schedule {kind} at {at!r} (now={self.now!r})")
        event = Event(
            time=at,
            sequence=next(self._sequence),
            kind=kind,
            patient=patient,
            receptionist=receptionist,
            office=office,
        )
        self._heap.push(event)
        logger.debug("Scheduled %r", event)
        return event

    def run(self, stop_time: Instant = Instant.Infinity) -> int:
        """Dispatch events until the list empties or the next one is past ``stop_time``.

        Events stamped exactly at ``stop_time`` are dispatched. If the run
        stops at the horizon the clock is moved to ``stop_time``.

        Returns:
            Number of events dispatched by this call.
        """
        logger.info("Run started at %r (stop=%r, pending=%d)", self.now, stop_time, self.pending)
        wall_start = time.perf_counter()
        dispatched = 0

        while self._heap.has_events():
            if self._heap.peek().time > stop_time:
                break
            event = self._heap.pop()
            self._clock.update(event.time)
            logger.debug("Dispatching %r", event)
            entity_ids = self._handlers[event.kind](event)
            dispatched += 1
            self._events_dispatched += 1
            if entity_ids is None:
                logger.debug("%r changed nothing", event)
            elif self._observer is not None:
                self._observer(event.time.to_minutes(), event.kind, tuple(entity_ids))

        if self._heap.has_events() and not stop_time.is_infinite() and self.now < stop_time:
            self._clock.update(stop_time)

        logger.info(
            "Run finished at %r: %d events in %.3fs wall, %d pending",
            self.now,
            dispatched,
            time.perf_counter() - wall_start,
            self.pending,
        )
        return dispatched
