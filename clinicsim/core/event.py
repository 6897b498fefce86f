"""Tagged event variants dispatched by the EventScheduler.

The set of event kinds is closed. The scheduler refuses to start unless a
handler is registered for every member of EventKind, so adding a variant
without handling it fails at construction instead of at dispatch.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Optional

from clinicsim.core.temporal import Instant

if TYPE_CHECKING:
    from clinicsim.entities.office import Office
    from clinicsim.entities.patient import Patient
    from clinicsim.entities.receptionist import Receptionist


class EventKind(Enum):
    ARRIVAL = "Arrival"
    TRIAGE_START = "TriageStart"
    TRIAGE_END = "TriageEnd"
    CONSULTATION_START = "ConsultationStart"
    CONSULTATION_END = "ConsultationEnd"
    RETRY = "Retry"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, eq=False)
class Event:
    """An immutable entry on the future-event list.

    Ordering is by ``(time, sequence)``: the sequence number is assigned by
    the scheduler at insertion, so events sharing a timestamp fire in the
    order they were scheduled.

    Attributes:
        time: Virtual time at which the event fires.
        sequence: Insertion order, used as the tie-break.
        kind: Which handler receives the event.
        patient: Patient involved, if any.
        receptionist: Receptionist involved, if any.
        office: Office involved, if any.
    """

    time: Instant
    sequence: int
    kind: EventKind
    patient: Optional[Patient] = None
    receptionist: Optional[Receptionist] = None
    office: Optional[Office] = None

    def __lt__(self, other: Event) -> bool:
        if not isinstance(other, Event):
            return NotImplemented
        if self.time == other.time:
            return self.sequence < other.sequence
        return self.time < other.time

    def entity_ids(self) -> tuple[str, ...]:
        """Identifiers of the entities this event carries, in a fixed order."""
        return tuple(
            entity.id
            for entity in (self.patient, self.receptionist, self.office)
            if entity is not None
        )

    def __repr__(self) -> str:
        ids = ", ".join(self.entity_ids())
        return f"Event({self.time!r}, {self.kind}, #{self.sequence}, [{ids}])"
