"""Patient entity and its lifecycle state machine."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Optional

from clinicsim.core.temporal import Instant

logger = logging.getLogger(__name__)


class PatientState(Enum):
    ARRIVED = "arrived"
    WAITING_RECEPTION = "waiting_reception"
    IN_TRIAGE = "in_triage"
    WAITING_OFFICE = "waiting_office"
    DIRECT_TO_OFFICE = "direct_to_office"
    IN_CONSULTATION = "in_consultation"
    AWAITING_RETRY = "awaiting_retry"
    DEPARTED = "departed"
    DROPPED = "dropped"


_TRANSITIONS: dict[PatientState, frozenset[PatientState]] = {
    PatientState.ARRIVED: frozenset(
        {PatientState.WAITING_RECEPTION, PatientState.AWAITING_RETRY, PatientState.DROPPED}
    ),
    PatientState.WAITING_RECEPTION: frozenset({PatientState.IN_TRIAGE}),
    PatientState.IN_TRIAGE: frozenset(
        {
            PatientState.WAITING_OFFICE,
            PatientState.DIRECT_TO_OFFICE,
            PatientState.AWAITING_RETRY,
            PatientState.DROPPED,
        }
    ),
    PatientState.AWAITING_RETRY: frozenset(
        {
            PatientState.WAITING_RECEPTION,
            PatientState.WAITING_OFFICE,
            PatientState.DIRECT_TO_OFFICE,
            PatientState.DROPPED,
        }
    ),
    PatientState.WAITING_OFFICE: frozenset({PatientState.IN_CONSULTATION}),
    PatientState.DIRECT_TO_OFFICE: frozenset({PatientState.IN_CONSULTATION}),
    PatientState.IN_CONSULTATION: frozenset({PatientState.DEPARTED}),
    PatientState.DEPARTED: frozenset(),
    PatientState.DROPPED: frozenset(),
}


class Patient:
    """A patient moving through reception and consultation.

    Timestamps are filled in as the patient advances and always satisfy
    arrival <= triage_start <= triage_end <= consultation_start <=
    consultation_end for the fields that are set.

    Attributes:
        id: Unique identifier, never shared between instances.
        arrival_time: When the patient entered the clinic.
        urgent: Urgency flag, sampled at the end of triage.
        state: Current lifecycle state.
        office_index: 1-based index of the office the patient was routed to.
        retries: Number of failed admission attempts so far.
    """

    def __init__(self, patient_id: str, arrival_time: Instant):
        self.id = patient_id
        self.arrival_time = arrival_time
        self.triage_start: Optional[Instant] = None
        self.triage_end: Optional[Instant] = None
        self.consultation_start: Optional[Instant] = None
        self.consultation_end: Optional[Instant] = None
        self.urgent = False
        self.state = PatientState.ARRIVED
        self.office_index: Optional[int] = None
        self.retries = 0

    def advance(self, new_state: PatientState) -> None:
        """Move to ``new_state``.

        Raises:
            RuntimeError: If the lifecycle does not allow the transition.
        """
        if new_state not in _TRANSITIONS[self.state]:
            raise RuntimeError(f"Patient {self.id}: illegal transition {self.state.value} -> {new_state.value}")
        logger.debug("Patient %s: %s -> %s", self.id, self.state.value, new_state.value)
        self.state = new_state

    def _stamp(self, field: str, previous: Optional[Instant], now: Instant) -> None:
        if previous is not None and now < previous:
            raise RuntimeError(f"Patient {self.id}: {field} {now!r} precedes {previous!r}")
        setattr(self, field, now)

    def mark_triage_start(self, now: Instant) -> None:
        self._stamp("triage_start", self.arrival_time, now)
        self.advance(PatientState.IN_TRIAGE)

    def mark_triage_end(self, now: Instant) -> None:
        self._stamp("triage_end", self.triage_start, now)

    def mark_consultation_start(self, now: Instant) -> None:
        self._stamp("consultation_start", self.triage_end if self.triage_end is not None else self.arrival_time, now)
        self.advance(PatientState.IN_CONSULTATION)

    def mark_consultation_end(self, now: Instant) -> None:
        self._stamp("consultation_end", self.consultation_start, now)
        self.advance(PatientState.DEPARTED)

    @property
    def triage_wait(self) -> Optional[float]:
        if self.triage_start is None:
            return None
        return self.triage_start - self.arrival_time

    @property
    def office_wait(self) -> Optional[float]:
        if self.consultation_start is None or self.triage_end is None:
            return None
        return self.consultation_start - self.triage_end

    @property
    def waiting_time(self) -> Optional[float]:
        """Consultation start minus arrival."""
        if self.consultation_start is None:
            return None
        return self.consultation_start - self.arrival_time

    @property
    def system_time(self) -> Optional[float]:
        """Consultation end minus arrival."""
        if self.consultation_end is None:
            return None
        return self.consultation_end - self.arrival_time

    def timestamps_ordered(self) -> bool:
        stamps = [
            t
            for t in (
                self.arrival_time,
                self.triage_start,
                self.triage_end,
                self.consultation_start,
                self.consultation_end,
            )
            if t is not None
        ]
        return all(a <= b for a, b in zip(stamps, stamps[1:]))

    def __repr__(self) -> str:
        flag = ", urgent" if self.urgent else ""
        return f"Patient({self.id}, {self.state.value}{flag})"
