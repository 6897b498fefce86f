"""Read-only statistics produced at the end of a run.

StatisticsSnapshot is what the network hands to reporting code. It holds
plain values only (no live entities), so it stays valid after the network
moves on or is discarded.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any

import pandas as pd


@dataclass(frozen=True)
class OfficeStats:
    """Per-office statistics."""
    id: str
    index: int
    served: int
    occupied_time: float
    utilisation: float
    average_queue_length: float
    peak_queue_length: int
    queue_length: int


@dataclass(frozen=True)
class ReceptionistStats:
    """Per-receptionist statistics."""
    id: str
    served: int
    busy_time: float


@dataclass(frozen=True)
class StatisticsSnapshot:
    """Statistics of one run, taken at ``end_time``.

    Times are in time units (minutes). Averages of empty tallies are 0.0.
    """
    end_time: float
    events_dispatched: int
    arrived: int
    served: int
    dropped: int
    waiting: int
    in_triage: int
    in_consultation: int
    average_waiting_time: float
    average_system_time: float
    average_triage_wait: float
    reception_average_queue_length: float
    reception_peak_queue_length: int
    offices: tuple[OfficeStats, ...] = ()
    receptionists: tuple[ReceptionistStats, ...] = ()
    dropped_by_reason: dict[str, int] = field(default_factory=dict)
    tallies: dict[str, dict[str, float]] = field(default_factory=dict)

    def conservation_holds(self) -> bool:
        """arrived == waiting + in triage + in consultation + served + dropped."""
        return self.arrived == (
            self.waiting + self.in_triage + self.in_consultation + self.served + self.dropped
        )

    def office(self, index: int) -> OfficeStats:
        """Look up an office by its 1-based index."""
        for stats in self.offices:
            if stats.index == index:
                return stats
        raise KeyError(f"No office with index {index}")

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    def offices_frame(self) -> pd.DataFrame:
        """One row per office, indexed by office index."""
        columns = [f.name for f in OfficeStats.__dataclass_fields__.values()]
        frame = pd.DataFrame([asdict(o) for o in self.offices], columns=columns)
        return frame.set_index("index")

    def receptionists_frame(self) -> pd.DataFrame:
        """One row per receptionist, indexed by id."""
        columns = [f.name for f in ReceptionistStats.__dataclass_fields__.values()]
        frame = pd.DataFrame([asdict(r) for r in self.receptionists], columns=columns)
        return frame.set_index("id")
