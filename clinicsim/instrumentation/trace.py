"""Ready-made observers for the scheduler's observability hook.

The core never formats trace output. It calls the observer with
``(time, kind, entity_ids)`` after every dispatched event; what happens next
belongs to whoever registered the observer.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

from clinicsim.core.event import EventKind


@dataclass(frozen=True)
class TransitionRecord:
    time: float
    kind: EventKind
    entity_ids: tuple[str, ...]


class TraceRecorder:
    """Stores every transition in memory, in dispatch order."""

    def __init__(self) -> None:
        self.records: list[TransitionRecord] = []

    def __call__(self, time: float, kind: EventKind, entity_ids: tuple[str, ...]) -> None:
        self.records.append(TransitionRecord(time, kind, entity_ids))

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[TransitionRecord]:
        return iter(self.records)

    def of_kind(self, kind: EventKind) -> list[TransitionRecord]:
        return [r for r in self.records if r.kind is kind]

    def involving(self, entity_id: str) -> list[TransitionRecord]:
        """Transitions that carried ``entity_id``."""
        return [r for r in self.records if entity_id in r.entity_ids]

    def clear(self) -> None:
        self.records.clear()


class NullTraceRecorder:
    """Observer that discards everything."""

    def __call__(self, time: float, kind: EventKind, entity_ids: tuple[str, ...]) -> None:
        return None
