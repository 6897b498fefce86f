"""Receptionist entity: performs triage on one patient at a time."""

from __future__ import annotations

import logging
from typing import Optional

from clinicsim.core.temporal import Instant
from clinicsim.entities.patient import Patient
from clinicsim.errors import require

logger = logging.getLogger(__name__)


class Receptionist:
    """A triage desk.

    Attributes:
        id: Unique identifier.
        patient: Patient currently in triage, or None when idle.
        served: Number of triages completed.
        busy_time: Total time spent triaging, in time units.
    """

    def __init__(self, receptionist_id: str):
        self.id = receptionist_id
        self.patient: Optional[Patient] = None
        self.served = 0
        self.busy_time = 0.0
        self._busy_since: Optional[Instant] = None

    @property
    def is_available(self) -> bool:
        return self.patient is None

    def begin(self, patient: Patient, now: Instant) -> None:
        """Take ``patient`` into triage.

        Raises:
            NullEntityReference: If ``patient`` is None.
            RuntimeError: If already triaging someone.
        """
        require(patient, "patient")
        if not self.is_available:
            raise RuntimeError(f"Receptionist {self.id} is busy with {self.patient.id}")
        self.patient = patient
        patient.mark_triage_start(now)
        self._busy_since = now
        logger.debug("Receptionist %s: triage of %s started", self.id, patient.id)

    def finish(self, now: Instant) -> Patient:
        """Release the current patient and return it.

        Raises:
            RuntimeError: If idle.
        """
        if self.patient is None:
            raise RuntimeError(f"Receptionist {self.id} has no patient to release")
        patient = self.patient
        patient.mark_triage_end(now)
        self.patient = None
        self.served += 1
        self.busy_time += now - self._busy_since
        self._busy_since = None
        logger.debug("Receptionist %s: triage of %s finished", self.id, patient.id)
        return patient

    def __repr__(self) -> str:
        status = "idle" if self.is_available else f"busy({self.patient.id})"
        return f"Receptionist({self.id}, {status}, served={self.served})"
