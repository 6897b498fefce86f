"""FIFO queue with a hard capacity and a time-weighted average length.

The queue never grows past its capacity: ``insert`` raises QueueFull and the
caller decides whether to drop or redirect the item. Every length change
folds ``length * elapsed`` into a running area, so ``average_length`` is the
exact time integral of the length divided by the observation window.
"""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Iterator
from typing import Generic, TypeVar

from clinicsim.core.temporal import Instant
from clinicsim.errors import InvalidConfiguration, QueueEmpty, QueueFull

logger = logging.getLogger(__name__)

T = TypeVar("T")


class BoundedQueue(Generic[T]):
    """A bounded FIFO buffer.

    Args:
        name: Label used in logs and errors.
        capacity: Maximum number of items held at once (``>= 0``).
        start_time: Beginning of the observation window.
    """

    def __init__(self, name: str, capacity: int, start_time: Instant = Instant.Epoch):
        if isinstance(capacity, bool) or not isinstance(capacity, int) or capacity < 0:
            raise InvalidConfiguration(f"Queue '{name}' capacity must be a non-negative int, got {capacity!r}")
        self.name = name
        self.capacity = capacity
        self._items: deque[T] = deque()
        self._window_start = start_time
        self._last_change = start_time
        self._area = 0.0
        self.max_length = 0
        self.total_inserted = 0

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    def __contains__(self, item) -> bool:
        return item in self._items

    @property
    def length(self) -> int:
        return len(self._items)

    def is_empty(self) -> bool:
        return not self._items

    def is_full(self) -> bool:
        return len(self._items) >= self.capacity

    def first(self) -> T:
        """Peek at the head without removing it."""
        if not self._items:
            raise QueueEmpty(self.name)
        return self._items[0]

    def insert(self, item: T, now: Instant) -> None:
        """Append ``item`` at the tail.

        Raises:
            QueueFull: If the queue already holds ``capacity`` items.
        """
        if self.is_full():
            raise QueueFull(self.name, self.capacity)
        self._advance(now)
        self._items.append(item)
        self._after_insert()

    def insert_first(self, item: T, now: Instant) -> None:
        """Place ``item`` at the head, ahead of everyone already waiting.

        Raises:
            QueueFull: If the queue already holds ``capacity`` items.
        """
        if self.is_full():
            raise QueueFull(self.name, self.capacity)
        self._advance(now)
        self._items.appendleft(item)
        self._after_insert()

    def remove_first(self, now: Instant) -> T:
        """Remove and return the head.

        Raises:
            QueueEmpty: If there is nothing to remove.
        """
        if not self._items:
            raise QueueEmpty(self.name)
        self._advance(now)
        item = self._items.popleft()
        logger.debug("[%s] removed head, length=%d", self.name, len(self._items))
        return item

    def average_length(self, now: Instant) -> float:
        """Time-weighted mean length over ``[window start, now]``.

        Returns 0.0 when no time has elapsed.
        """
        elapsed = now - self._window_start
        if elapsed <= 0:
            return 0.0
        area = self._area + len(self._items) * (now - self._last_change)
        return area / elapsed

    def reset(self, now: Instant) -> None:
        """Start a fresh observation window at ``now``; contents are kept."""
        self._window_start = now
        self._last_change = now
        self._area = 0.0
        self.max_length = len(self._items)
        self.total_inserted = 0

    def _advance(self, now: Instant) -> None:
        if now < self._last_change:
            raise ValueError(f"Queue '{self.name}' updated at {now!r}, before last change {self._last_change!r}")
        self._area += len(self._items) * (now - self._last_change)
        self._last_change = now

    def _after_insert(self) -> None:
        self.total_inserted += 1
        if len(self._items) > self.max_length:
            self.max_length = len(self._items)
        logger.debug("[%s] inserted, length=%d/%d", self.name, len(self._items), self.capacity)

    def __repr__(self) -> str:
        return f"BoundedQueue({self.name!r}, {len(self._items)}/{self.capacity})"
