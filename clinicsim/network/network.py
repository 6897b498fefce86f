"""The clinic network: arrival, reception triage and consultation.

ClinicNetwork owns every piece of mutable state (queues, receptionists,
offices, statistics) and mutates it only from its event handlers. Handlers
receive the event that woke them and reach the clock through the scheduler,
so entities never look anything up on their own.

Patient flow::

    Arrival -> reception queue -> TriageStart -> TriageEnd -> office assignment
            -> office queue (or direct, if urgent) -> ConsultationStart
            -> ConsultationEnd -> departed
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Optional

from clinicsim.core.event import Event, EventKind
from clinicsim.core.scheduler import EventScheduler, Observer
from clinicsim.core.temporal import Instant
from clinicsim.distributions import RandomVariateGenerator
from clinicsim.entities import BoundedQueue, Office, Patient, PatientState, Receptionist
from clinicsim.errors import QueueFull, require
from clinicsim.instrumentation import (
    Count,
    OfficeStats,
    ReceptionistStats,
    StatisticsSnapshot,
    Tally,
)
from clinicsim.network.config import DropPolicy, NetworkConfig
from clinicsim.network.routing import RoutingPolicy
from clinicsim.utils.ids import IdAllocator

logger = logging.getLogger(__name__)

DROP_RECEPTION_FULL = "reception_full"
DROP_NO_OFFICE = "no_office"

DepartureHook = Callable[[Patient], None]


def _ids(*entities) -> tuple[str, ...]:
    """Identifiers of the given entities, skipping the ones that are None."""
    return tuple(entity.id for entity in entities if entity is not None)


class ClinicNetwork:
    """Discrete-event model of a clinic with triage and consultation offices.

    Args:
        config: Run parameters.
        observer: Optional hook called after every dispatched event with
            ``(time, kind, entity_ids)``.
        on_departure: Optional hook called with each patient as they leave,
            after which the network holds no reference to them.
        routing: Office selection policy.
        variates: Random-variate source; built from ``config`` when omitted.
    """

    def __init__(
        self,
        config: NetworkConfig,
        observer: Optional[Observer] = None,
        on_departure: Optional[DepartureHook] = None,
        routing: Optional[RoutingPolicy] = None,
        variates: Optional[RandomVariateGenerator] = None,
    ):
        self.config = config
        self.routing = routing or RoutingPolicy()
        self.variates = variates or RandomVariateGenerator(
            seed=config.seed,
            arrival=config.arrival,
            triage=config.triage,
            consultation=config.consultation,
            urgency_probability=config.urgency_probability,
        )
        self._on_departure = on_departure
        self._ids = IdAllocator()

        self.scheduler = EventScheduler(
            handlers={
                EventKind.ARRIVAL: self._on_arrival,
                EventKind.TRIAGE_START: self._on_triage_start,
                EventKind.TRIAGE_END: self._on_triage_end,
                EventKind.CONSULTATION_START: self._on_consultation_start,
                EventKind.CONSULTATION_END: self._on_consultation_end,
                EventKind.RETRY: self._on_retry,
            },
            observer=observer,
        )
        start = self.scheduler.now
        self.horizon = Instant.from_minutes(config.horizon)

        self.reception_queue: BoundedQueue[Patient] = BoundedQueue(
            "reception", config.effective_reception_capacity, start
        )
        self.receptionists = [
            Receptionist(self._ids.next_id("R", padded=False)) for _ in range(config.num_receptionists)
        ]
        self.offices = [
            Office(self._ids.next_id("O", padded=False), index, config.queue_capacity, start)
            for index in range(1, config.num_offices + 1)
        ]

        self.arrived = Count("arrived")
        self.served = Count("served")
        self.dropped = Count("dropped")
        self.dropped_by_reason = {
            DROP_RECEPTION_FULL: Count(DROP_RECEPTION_FULL),
            DROP_NO_OFFICE: Count(DROP_NO_OFFICE),
        }
        self.waiting_time = Tally("waiting_time")
        self.system_time = Tally("system_time")
        self.triage_wait = Tally("triage_wait")
        self.office_wait = Tally("office_wait")

        self._parked = 0
        self._started = False

    # ------------------------------------------------------------------
    # Running
    # ------------------------------------------------------------------

    @property
    def now(self) -> Instant:
        return self.scheduler.now

    def run(self) -> StatisticsSnapshot:
        """Run until the horizon and return the statistics snapshot.

        Raises:
            RuntimeError: If called twice on the same network.
        """
        if self._started:
            raise RuntimeError("ClinicNetwork.run() can only be called once")
        self._started = True

        logger.info(
            "Starting clinic run: horizon=%s offices=%d receptionists=%d seed=%s",
            self.config.horizon,
            len(self.offices),
            len(self.receptionists),
            self.config.seed,
        )
        if self.now < self.horizon:
            self.scheduler.schedule_at(EventKind.ARRIVAL, self.now)
        self.scheduler.run(self.horizon)

        snapshot = self.snapshot()
        logger.info(
            "Clinic run finished at %.3f: arrived=%d served=%d dropped=%d",
            snapshot.end_time,
            snapshot.arrived,
            snapshot.served,
            snapshot.dropped,
        )
        return snapshot

    # ------------------------------------------------------------------
    # Handlers
    # ------------------------------------------------------------------

    def _on_arrival(self, event: Event) -> tuple[str, ...]:
        patient = Patient(self._ids.next_id("P"), self.now)
        self.arrived.update()
        logger.debug("t=%.3f arrival of %s", self.now.to_minutes(), patient.id)
        self._admit(patient)

        next_arrival = self.now + self.variates.inter_arrival_time()
        if next_arrival < self.horizon:
            self.scheduler.schedule_at(EventKind.ARRIVAL, next_arrival)
        return (patient.id,)

    def _on_triage_start(self, event: Event) -> Optional[tuple[str, ...]]:
        receptionist = self._idle_receptionist()
        if receptionist is None or self.reception_queue.is_empty():
            logger.debug("t=%.3f triage start skipped: nobody idle or nobody waiting", self.now.to_minutes())
            return None

        patient = self.reception_queue.remove_first(self.now)
        receptionist.begin(patient, self.now)
        self.triage_wait.update(patient.triage_wait)
        self.scheduler.schedule(
            EventKind.TRIAGE_END,
            self.variates.triage_duration(),
            patient=patient,
            receptionist=receptionist,
        )
        return (patient.id, receptionist.id)

    def _on_triage_end(self, event: Event) -> tuple[str, ...]:
        receptionist = require(event.receptionist, "TriageEnd receptionist")
        require(event.patient, "TriageEnd patient")
        if receptionist.patient is not event.patient:
            raise RuntimeError(f"{receptionist!r} is not triaging {event.patient!r}")

        patient = receptionist.finish(self.now)
        patient.urgent = self.variates.is_urgent()
        office = self._assign_office(patient)

        if not self.reception_queue.is_empty() and self._idle_receptionist() is not None:
            self.scheduler.schedule(EventKind.TRIAGE_START, 0)
        return _ids(patient, receptionist, office)

    def _on_consultation_start(self, event: Event) -> Optional[tuple[str, ...]]:
        office = require(event.office, "ConsultationStart office")

        if event.patient is not None:
            patient = event.patient
        elif not office.is_available or office.queue.is_empty():
            logger.debug("t=%.3f %r: consultation start skipped", self.now.to_minutes(), office)
            return None
        else:
            patient = office.queue.remove_first(self.now)

        office.begin(patient, self.now)
        self.waiting_time.update(patient.waiting_time)
        self.office_wait.update(patient.office_wait)
        self.scheduler.schedule(
            EventKind.CONSULTATION_END,
            self.variates.consultation_duration(),
            patient=patient,
            office=office,
        )
        return (patient.id, office.id)

    def _on_consultation_end(self, event: Event) -> tuple[str, ...]:
        office = require(event.office, "ConsultationEnd office")
        require(event.patient, "ConsultationEnd patient")
        if office.patient is not event.patient:
            raise RuntimeError(f"{office!r} is not consulting {event.patient!r}")

        patient = office.finish(self.now)
        self.served.update()
        self.system_time.update(patient.system_time)
        logger.debug(
            "t=%.3f %s departed from office %d after %.3f",
            self.now.to_minutes(),
            patient.id,
            office.index,
            patient.system_time,
        )
        if self._on_departure is not None:
            self._on_departure(patient)

        if not office.queue.is_empty():
            self.scheduler.schedule(EventKind.CONSULTATION_START, 0, office=office)
        return (patient.id, office.id)

    def _on_retry(self, event: Event) -> tuple[str, ...]:
        patient = require(event.patient, "Retry patient")
        self._parked -= 1
        logger.debug("t=%.3f retry #%d for %s", self.now.to_minutes(), patient.retries, patient.id)
        if patient.triage_end is None:
            self._admit(patient)
            return (patient.id,)
        return _ids(patient, self._assign_office(patient))

    # ------------------------------------------------------------------
    # Routing helpers
    # ------------------------------------------------------------------

    def _idle_receptionist(self) -> Optional[Receptionist]:
        for receptionist in self.receptionists:
            if receptionist.is_available:
                return receptionist
        return None

    def _admit(self, patient: Patient) -> None:
        """Put ``patient`` in the reception queue and wake a receptionist."""
        try:
            self.reception_queue.insert(patient, self.now)
        except QueueFull:
            self._reject(patient, DROP_RECEPTION_FULL)
            return
        patient.advance(PatientState.WAITING_RECEPTION)
        if self._idle_receptionist() is not None:
            self.scheduler.schedule(EventKind.TRIAGE_START, 0)

    def _assign_office(self, patient: Patient) -> Optional[Office]:
        """Route a triaged patient to an office; returns None if they were rejected."""
        office = self.routing.select(self.offices, patient)
        if office is None:
            self._reject(patient, DROP_NO_OFFICE)
            return None

        patient.office_index = office.index
        if patient.urgent and office.is_available:
            office.reserve(patient)
            patient.advance(PatientState.DIRECT_TO_OFFICE)
            self.scheduler.schedule(EventKind.CONSULTATION_START, 0, patient=patient, office=office)
            return office

        try:
            if patient.urgent:
                office.queue.insert_first(patient, self.now)
            else:
                office.queue.insert(patient, self.now)
        except QueueFull:
            self._reject(patient, DROP_NO_OFFICE)
            return None
        patient.advance(PatientState.WAITING_OFFICE)
        if office.is_available:
            self.scheduler.schedule(EventKind.CONSULTATION_START, 0, office=office)
        return office

    def _reject(self, patient: Patient, reason: str) -> None:
        config = self.config
        if config.drop_policy is DropPolicy.RETRY and patient.retries < config.max_retries:
            patient.retries += 1
            if patient.state is not PatientState.AWAITING_RETRY:
                patient.advance(PatientState.AWAITING_RETRY)
            self._parked += 1
            self.scheduler.schedule(EventKind.RETRY, config.retry_delay, patient=patient)
            logger.debug("%s parked (%s), retry %d/%d", patient.id, reason, patient.retries, config.max_retries)
            return

        patient.advance(PatientState.DROPPED)
        self.dropped.update()
        self.dropped_by_reason[reason].update()
        logger.info("t=%.3f %s dropped: %s", self.now.to_minutes(), patient.id, reason)

    # ------------------------------------------------------------------
    # Statistics
    # ------------------------------------------------------------------

    @property
    def waiting(self) -> int:
        """Patients queued anywhere, held by a reserved office, or parked for retry."""
        queued = len(self.reception_queue) + sum(len(o.queue) for o in self.offices)
        reserved = sum(1 for o in self.offices if o.reserved_for is not None)
        return queued + reserved + self._parked

    @property
    def in_triage(self) -> int:
        return sum(1 for r in self.receptionists if not r.is_available)

    @property
    def in_consultation(self) -> int:
        return sum(1 for o in self.offices if o.patient is not None)

    def snapshot(self) -> StatisticsSnapshot:
        """Freeze the current statistics into plain values."""
        now = self.now
        elapsed = now - Instant.Epoch
        return StatisticsSnapshot(
            end_time=now.to_minutes(),
            events_dispatched=self.scheduler.events_dispatched,
            arrived=self.arrived.value,
            served=self.served.value,
            dropped=self.dropped.value,
            waiting=self.waiting,
            in_triage=self.in_triage,
            in_consultation=self.in_consultation,
            average_waiting_time=self.waiting_time.mean,
            average_system_time=self.system_time.mean,
            average_triage_wait=self.triage_wait.mean,
            reception_average_queue_length=self.reception_queue.average_length(now),
            reception_peak_queue_length=self.reception_queue.max_length,
            offices=tuple(
                OfficeStats(
                    id=office.id,
                    index=office.index,
                    served=office.served,
                    occupied_time=office.occupied_time,
                    utilisation=office.utilisation(elapsed),
                    average_queue_length=office.queue.average_length(now),
                    peak_queue_length=office.queue.max_length,
                    queue_length=len(office.queue),
                )
                for office in self.offices
            ),
            receptionists=tuple(
                ReceptionistStats(id=r.id, served=r.served, busy_time=r.busy_time)
                for r in self.receptionists
            ),
            dropped_by_reason={reason: count.value for reason, count in self.dropped_by_reason.items()},
            tallies={
                tally.name: tally.to_dict()
                for tally in (self.waiting_time, self.system_time, self.triage_wait, self.office_wait)
            },
        )
