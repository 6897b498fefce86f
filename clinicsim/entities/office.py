"""Consultation office with its own bounded waiting queue."""

from __future__ import annotations

import logging
from typing import Optional

from clinicsim.core.temporal import Instant
from clinicsim.entities.bounded_queue import BoundedQueue
from clinicsim.entities.patient import Patient
from clinicsim.errors import require

logger = logging.getLogger(__name__)


class Office:
    """A consultation office.

    Attributes:
        id: Unique identifier.
        index: 1-based position in the network's office list.
        queue: Patients routed here and waiting for the office.
        patient: Patient in consultation, or None when idle.
        reserved_for: Urgent patient the idle office is being held for until
            their consultation starts.
        served: Number of consultations completed.
        occupied_time: Total consultation time, in time units.
    """

    def __init__(self, office_id: str, index: int, capacity: int, start_time: Instant = Instant.Epoch):
        self.id = office_id
        self.index = index
        self.queue: BoundedQueue[Patient] = BoundedQueue(f"{office_id} queue", capacity, start_time)
        self.patient: Optional[Patient] = None
        self.reserved_for: Optional[Patient] = None
        self.served = 0
        self.occupied_time = 0.0

    @property
    def is_available(self) -> bool:
        return self.patient is None and self.reserved_for is None

    @property
    def has_room(self) -> bool:
        return not self.queue.is_full()

    def reserve(self, patient: Patient) -> None:
        """Hold this idle office for ``patient``.

        Raises:
            NullEntityReference: If ``patient`` is None.
            RuntimeError: If the office is busy or already reserved.
        """
        require(patient, "patient")
        if not self.is_available:
            raise RuntimeError(f"Office {self.id} cannot be reserved: {self!r}")
        self.reserved_for = patient

    def begin(self, patient: Patient, now: Instant) -> None:
        """Start consulting ``patient``.

        A reserved office only accepts the patient it is reserved for.

        Raises:
            NullEntityReference: If ``patient`` is None.
            RuntimeError: If a consultation is already in progress.
        """
        require(patient, "patient")
        if self.patient is not None:
            raise RuntimeError(f"Office {self.id} is busy with {self.patient.id}")
        if self.reserved_for is not None and self.reserved_for is not patient:
            raise RuntimeError(f"Office {self.id} is reserved for {self.reserved_for.id}")
        self.reserved_for = None
        self.patient = patient
        patient.mark_consultation_start(now)
        logger.debug("Office %s: consultation of %s started", self.id, patient.id)

    def finish(self, now: Instant) -> Patient:
        """End the current consultation and return the departing patient.

        Raises:
            RuntimeError: If the office is idle.
        """
        if self.patient is None:
            raise RuntimeError(f"Office {self.id} has no patient to release")
        patient = self.patient
        patient.mark_consultation_end(now)
        self.patient = None
        self.served += 1
        self.occupied_time += now - patient.consultation_start
        logger.debug("Office %s: consultation of %s finished", self.id, patient.id)
        return patient

    def utilisation(self, elapsed: float) -> float:
        if elapsed <= 0:
            return 0.0
        return self.occupied_time / elapsed

    def __repr__(self) -> str:
        if self.patient is not None:
            status = f"busy({self.patient.id})"
        elif self.reserved_for is not None:
            status = f"reserved({self.reserved_for.id})"
        else:
            status = "idle"
        return f"Office({self.index}, {status}, queue={len(self.queue)}/{self.queue.capacity})"
