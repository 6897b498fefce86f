"""Running accumulators updated from inside event handlers.

Count is a monotonic total. Tally keeps count, mean and variance of a
sampled quantity using Welford's online update, so no samples are stored.
"""

from __future__ import annotations

import math


class Count:
    """A monotonically increasing counter."""

    def __init__(self, name: str):
        self.name = name
        self._value = 0

    @property
    def value(self) -> int:
        return self._value

    def update(self, amount: int = 1) -> None:
        if amount < 0:
            raise ValueError(f"Count '{self.name}' cannot decrease (amount={amount})")
        self._value += amount

    def __repr__(self) -> str:
        return f"Count({self.name!r}, {self._value})"


class Tally:
    """Count, mean, variance, min and max of observed values."""

    def __init__(self, name: str):
        self.name = name
        self._count = 0
        self._mean = 0.0
        self._m2 = 0.0
        self._min = math.inf
        self._max = -math.inf

    def update(self, value: float) -> None:
        self._count += 1
        delta = value - self._mean
        self._mean += delta / self._count
        self._m2 += delta * (value - self._mean)
        self._min = min(self._min, value)
        self._max = max(self._max, value)

    @property
    def count(self) -> int:
        return self._count

    @property
    def mean(self) -> float:
        """Sample mean. Returns 0.0 if nothing was observed."""
        return self._mean if self._count else 0.0

    @property
    def variance(self) -> float:
        """Unbiased sample variance. Returns 0.0 with fewer than 2 observations."""
        if self._count < 2:
            return 0.0
        return self._m2 / (self._count - 1)

    @property
    def std_dev(self) -> float:
        return math.sqrt(self.variance)

    @property
    def min(self) -> float:
        return self._min if self._count else 0.0

    @property
    def max(self) -> float:
        return self._max if self._count else 0.0

    def to_dict(self) -> dict[str, float]:
        return {
            "count": self.count,
            "mean": self.mean,
            "variance": self.variance,
            "std_dev": self.std_dev,
            "min": self.min,
            "max": self.max,
        }

    def __repr__(self) -> str:
        return f"Tally({self.name!r}, n={self._count}, mean={self.mean:.4f})"
