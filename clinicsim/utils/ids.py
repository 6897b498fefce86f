from collections import defaultdict

_ID_LENGTH = 6


class IdAllocator:
    """Hands out per-prefix, monotonically increasing identifiers.

    Each network owns its own allocator, so two runs with the same inputs
    produce the same identifiers in the same order.
    """

    def __init__(self, width: int = _ID_LENGTH):
        self._width = width
        self._counters: defaultdict[str, int] = defaultdict(int)

    def next_id(self, prefix: str, padded: bool = True) -> str:
        """Return ``<prefix>-<n>``, zero-padded to ``width`` digits when ``padded``."""
        self._counters[prefix] += 1
        value = self._counters[prefix]
        if padded:
            return f"{prefix}-{value:0{self._width}d}"
        return f"{prefix}-{value}"

    def issued(self, prefix: str) -> int:
        return self._counters[prefix]
