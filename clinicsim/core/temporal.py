"""Virtual time for the simulation clock.

Instant stores a point in virtual time as an integer number of ticks so that
two timestamps built from the same inputs always compare equal, regardless of
float rounding. One time unit (a minute, in the clinic model) is
``TICKS_PER_UNIT`` ticks.
"""

from __future__ import annotations

import math
from typing import Union

TICKS_PER_UNIT = 1_000_000_000


class Instant:
    """A point in virtual time.

    Adding a number to an Instant treats the number as a delay in time units.
    Subtracting two Instants yields the elapsed time in time units as a float.
    """

    __slots__ = ("ticks",)

    Epoch: Instant
    Infinity: Instant

    def __init__(self, ticks: Union[int, float]):
        if isinstance(ticks, float) and math.isinf(ticks):
            self.ticks = ticks
        else:
            self.ticks = int(ticks)

    @classmethod
    def from_minutes(cls, minutes: Union[int, float]) -> Instant:
        if isinstance(minutes, float) and math.isinf(minutes):
            return cls.Infinity if minutes > 0 else cls(-math.inf)
        if isinstance(minutes, int):
            return cls(minutes * TICKS_PER_UNIT)
        return cls(round(minutes * TICKS_PER_UNIT))

    def to_minutes(self) -> float:
        return float(self.ticks) / TICKS_PER_UNIT

    def is_infinite(self) -> bool:
        return isinstance(self.ticks, float)

    def __add__(self, other: Union[Instant, int, float]) -> Instant:
        if self.is_infinite():
            return self
        if isinstance(other, (int, float)):
            return Instant(self.ticks + Instant.from_minutes(other).ticks)
        if isinstance(other, Instant):
            return Instant(self.ticks + other.ticks)
        return NotImplemented

    def __sub__(self, other: Union[Instant, int, float]):
        if isinstance(other, Instant):
            return (self.ticks - other.ticks) / TICKS_PER_UNIT
        if isinstance(other, (int, float)):
            return Instant(self.ticks - Instant.from_minutes(other).ticks)
        return NotImplemented

    def __eq__(self, other) -> bool:
        if not isinstance(other, Instant):
            return NotImplemented
        return self.ticks == other.ticks

    def __hash__(self) -> int:
        return hash(self.ticks)

    def __lt__(self, other) -> bool:
        if not isinstance(other, Instant):
            return NotImplemented
        return self.ticks < other.ticks

    def __le__(self, other) -> bool:
        if not isinstance(other, Instant):
            return NotImplemented
        return self.ticks <= other.ticks

    def __gt__(self, other) -> bool:
        if not isinstance(other, Instant):
            return NotImplemented
        return self.ticks > other.ticks

    def __ge__(self, other) -> bool:
        if not isinstance(other, Instant):
            return NotImplemented
        return self.ticks >= other.ticks

    def __repr__(self) -> str:
        if self.is_infinite():
            return "Instant(inf)"
        return f"Instant({self.to_minutes():g}min)"


Instant.Epoch = Instant(0)
Instant.Infinity = Instant(math.inf)
