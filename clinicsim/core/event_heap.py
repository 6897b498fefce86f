import heapq

from clinicsim.core.event import Event


class EventHeap:
    def __init__(self, events: list[Event] | None = None):
        """Store events directly on the heap.

        Event implements ordering by ``(time, sequence)``, so there's no need
        to store tuples. The objects' own comparison operators determine
        ordering.
        """
        self._heap = list(events) if events else []
        heapq.heapify(self._heap)

    def push(self, event: Event):
        heapq.heappush(self._heap, event)

    def pop(self) -> Event:
        return heapq.heappop(self._heap)

    def peek(self) -> Event:
        return self._heap[0]

    def has_events(self) -> bool:
        return bool(self._heap)

    def size(self) -> int:
        return len(self._heap)
