"""Office selection after triage.

Non-urgent patients join the office with the shortest queue among those
whose queue is strictly below capacity; ties go to the lowest index. Urgent
patients skip that comparison and take the first idle office, or failing
that the first office with queue room, where they go to the head of the line.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Optional

from clinicsim.entities.office import Office
from clinicsim.entities.patient import Patient
from clinicsim.errors import require

logger = logging.getLogger(__name__)


class RoutingPolicy:
    """Chooses the office a triaged patient is sent to."""

    def select(self, offices: Sequence[Office], patient: Patient) -> Optional[Office]:
        """Pick an office for ``patient``, or None if no office can take them.

        Raises:
            NullEntityReference: If ``patient`` is None.
        """
        require(patient, "patient")
        if patient.urgent:
            return self.select_urgent_office(offices)
        return self.select_office(offices)

    @staticmethod
    def select_office(offices: Sequence[Office]) -> Optional[Office]:
        """Shortest queue strictly below capacity; first encountered wins ties."""
        selected: Optional[Office] = None
        shortest = None
        for office in offices:
            length = len(office.queue)
            if length >= office.queue.capacity:
                continue
            if shortest is None or length < shortest:
                shortest = length
                selected = office
        if selected is None:
            logger.debug("No office has queue room")
        return selected

    @staticmethod
    def select_urgent_office(offices: Sequence[Office]) -> Optional[Office]:
        """First idle office, else the first office with queue room."""
        fallback: Optional[Office] = None
        for office in offices:
            if office.is_available:
                return office
            if fallback is None and office.has_room:
                fallback = office
        if fallback is None:
            logger.debug("No office has room for an urgent patient")
        return fallback
