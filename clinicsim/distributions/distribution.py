"""Parametric distributions used to drive arrivals, triage and consultations.

Each distribution validates its parameters on construction and draws from a
caller-supplied numpy Generator, so the random stream is owned by the caller
(see RandomVariateGenerator) and never by the distribution itself.
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

import numpy as np

from clinicsim.errors import InvalidConfiguration


def _require_finite(name: str, value: float) -> float:
    if value is None or isinstance(value, bool) or not math.isfinite(value):
        raise InvalidConfiguration(f"{name} must be a finite number, got {value!r}")
    return float(value)


class Distribution(ABC):
    """A sampleable continuous distribution."""

    @abstractmethod
    def sample(self, rng: np.random.Generator) -> float:
        """Draw one value using ``rng``."""

    @abstractmethod
    def expected_value(self) -> float:
        """Theoretical mean, for reporting."""

    def can_be_non_negative(self) -> bool:
        """Whether the distribution puts any mass on ``[0, inf)``."""
        return True

    @classmethod
    def from_mapping(cls, data: dict[str, Any]) -> Distribution:
        """Build a distribution from ``{"kind": ..., <params>}``.

        Raises:
            InvalidConfiguration: Unknown kind or bad parameters.
        """
        params = dict(data)
        kind = str(params.pop("kind", "")).lower()
        factory = _KINDS.get(kind)
        if factory is None:
            raise InvalidConfiguration(
                f"Unknown distribution kind {kind!r}; expected one of {sorted(_KINDS)}"
            )
        try:
            return factory(**params)
        except TypeError as exc:
            raise InvalidConfiguration(f"Bad parameters for {kind} distribution: {exc}") from exc


@dataclass(frozen=True)
class Constant(Distribution):
    """Always returns ``value``. Consumes no randomness."""

    value: float

    def __post_init__(self):
        _require_finite("value", self.value)

    def sample(self, rng: np.random.Generator) -> float:
        return float(self.value)

    def expected_value(self) -> float:
        return float(self.value)

    def can_be_non_negative(self) -> bool:
        return self.value >= 0


@dataclass(frozen=True)
class Exponential(Distribution):
    """Exponential distribution with the given ``rate`` (mean = 1/rate)."""

    rate: float

    def __post_init__(self):
        _require_finite("rate", self.rate)
        if self.rate <= 0:
            raise InvalidConfiguration(f"Exponential rate must be positive, got {self.rate}")

    @classmethod
    def from_mean(cls, mean: float) -> Exponential:
        _require_finite("mean", mean)
        if mean <= 0:
            raise InvalidConfiguration(f"Exponential mean must be positive, got {mean}")
        return cls(rate=1.0 / mean)

    def sample(self, rng: np.random.Generator) -> float:
        return float(rng.exponential(scale=1.0 / self.rate))

    def expected_value(self) -> float:
        return 1.0 / self.rate


@dataclass(frozen=True)
class Normal(Distribution):
    """Normal distribution with ``mean`` and standard deviation ``stddev``."""

    mean: float
    stddev: float

    def __post_init__(self):
        _require_finite("mean", self.mean)
        _require_finite("stddev", self.stddev)
        if self.stddev < 0:
            raise InvalidConfiguration(f"Normal stddev must be non-negative, got {self.stddev}")

    def sample(self, rng: np.random.Generator) -> float:
        return float(rng.normal(loc=self.mean, scale=self.stddev))

    def expected_value(self) -> float:
        return self.mean

    def can_be_non_negative(self) -> bool:
        return self.stddev > 0 or self.mean >= 0


@dataclass(frozen=True)
class Uniform(Distribution):
    """Uniform distribution on ``[low, high)``."""

    low: float
    high: float

    def __post_init__(self):
        _require_finite("low", self.low)
        _require_finite("high", self.high)
        if self.high < self.low:
            raise InvalidConfiguration(
                f"Uniform requires low <= high, got low={self.low} high={self.high}"
            )

    def sample(self, rng: np.random.Generator) -> float:
        return float(rng.uniform(self.low, self.high))

    def expected_value(self) -> float:
        return (self.low + self.high) / 2.0

    def can_be_non_negative(self) -> bool:
        return self.high > 0 or self.low >= 0


def _normal(mean: float, stddev: float) -> Normal:
    return Normal(mean=mean, stddev=stddev)


def _exponential(rate: float | None = None, mean: float | None = None) -> Exponential:
    if rate is None and mean is None:
        raise InvalidConfiguration("Exponential needs either 'rate' or 'mean'")
    if rate is not None:
        return Exponential(rate=rate)
    return Exponential.from_mean(mean)


_KINDS = {
    "constant": Constant,
    "exponential": _exponential,
    "normal": _normal,
    "uniform": Uniform,
}
