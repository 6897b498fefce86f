"""Configuration for a clinic network run.

The defaults describe a clinic with one receptionist and five offices, open
for 600 minutes. Patients arrive on average every 15 minutes, triage takes
5 minutes, and a consultation takes Normal(20, 5) minutes. Every queue holds
at most five patients and 30% of patients are urgent.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, Optional

from clinicsim.distributions import Constant, Distribution, Exponential, Normal
from clinicsim.errors import InvalidConfiguration


class DropPolicy(Enum):
    """What happens to a patient who finds no room."""

    DISCARD = "discard"
    """Count the patient as dropped and forget them."""

    RETRY = "retry"
    """Park the patient and retry after ``retry_delay``, up to ``max_retries`` times."""


def _check_positive_int(name: str, value: Any) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise InvalidConfiguration(f"{name} must be an int >= 1, got {value!r}")


def _check_non_negative_int(name: str, value: Any) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise InvalidConfiguration(f"{name} must be an int >= 0, got {value!r}")


def _check_non_negative_number(name: str, value: Any) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or math.isnan(value) or value < 0:
        raise InvalidConfiguration(f"{name} must be a number >= 0, got {value!r}")


@dataclass(frozen=True)
class NetworkConfig:
    """Parameters of one simulation run.

    Attributes:
        horizon: Length of the run in time units. Arrivals stop at the horizon.
        arrival: Inter-arrival time distribution.
        triage: Triage duration distribution.
        consultation: Consultation duration distribution.
        num_offices: Number of offices (>= 1).
        num_receptionists: Number of receptionists (>= 1).
        queue_capacity: Capacity of each office queue.
        reception_capacity: Capacity of the central reception queue; None
            means the same as ``queue_capacity``.
        urgency_probability: Probability that a triaged patient is urgent.
        seed: Random seed; None for a non-reproducible run.
        drop_policy: What to do with patients who find no room.
        retry_delay: Delay before a parked patient tries again (RETRY only).
        max_retries: Failed retries before a parked patient is dropped.
    """

    horizon: float = 600.0
    arrival: Distribution = field(default_factory=lambda: Exponential.from_mean(15.0))
    triage: Distribution = field(default_factory=lambda: Constant(5.0))
    consultation: Distribution = field(default_factory=lambda: Normal(20.0, 5.0))
    num_offices: int = 5
    num_receptionists: int = 1
    queue_capacity: int = 5
    reception_capacity: Optional[int] = None
    urgency_probability: float = 0.3
    seed: Optional[int] = None
    drop_policy: DropPolicy = DropPolicy.DISCARD
    retry_delay: float = 5.0
    max_retries: int = 3

    def __post_init__(self):
        _check_non_negative_number("horizon", self.horizon)
        if not math.isfinite(self.horizon):
            raise InvalidConfiguration(f"horizon must be finite, got {self.horizon!r}")
        for name in ("arrival", "triage", "consultation"):
            if not isinstance(getattr(self, name), Distribution):
                raise InvalidConfiguration(f"{name} must be a Distribution, got {getattr(self, name)!r}")
        if not self.arrival.expected_value() > 0:
            raise InvalidConfiguration(f"arrival distribution must have a positive mean, got {self.arrival!r}")
        _check_positive_int("num_offices", self.num_offices)
        _check_positive_int("num_receptionists", self.num_receptionists)
        _check_non_negative_int("queue_capacity", self.queue_capacity)
        if self.reception_capacity is not None:
            _check_non_negative_int("reception_capacity", self.reception_capacity)
        _check_non_negative_number("urgency_probability", self.urgency_probability)
        if self.urgency_probability > 1:
            raise InvalidConfiguration(f"urgency_probability must be <= 1, got {self.urgency_probability}")
        if self.seed is not None and (isinstance(self.seed, bool) or not isinstance(self.seed, int) or self.seed < 0):
            raise InvalidConfiguration(f"seed must be a non-negative int or None, got {self.seed!r}")
        if not isinstance(self.drop_policy, DropPolicy):
            raise InvalidConfiguration(f"drop_policy must be a DropPolicy, got {self.drop_policy!r}")
        _check_non_negative_number("retry_delay", self.retry_delay)
        _check_non_negative_int("max_retries", self.max_retries)
        if self.drop_policy is DropPolicy.RETRY and self.retry_delay <= 0:
            raise InvalidConfiguration("retry_delay must be positive when drop_policy is RETRY")

    @property
    def effective_reception_capacity(self) -> int:
        if self.reception_capacity is None:
            return self.queue_capacity
        return self.reception_capacity

    @classmethod
    def from_mapping(cls, data: dict[str, Any]) -> NetworkConfig:
        """Build a config from plain data, e.g. parsed JSON or CLI options.

        Distribution entries are mappings such as
        ``{"kind": "normal", "mean": 20, "stddev": 5}``; ``drop_policy`` is
        the policy's string value. Unknown keys are rejected.

        Raises:
            InvalidConfiguration: Unknown keys or invalid values.
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise InvalidConfiguration(f"Unknown configuration keys: {', '.join(unknown)}")

        kwargs = dict(data)
        for name in ("arrival", "triage", "consultation"):
            value = kwargs.get(name)
            if isinstance(value, dict):
                kwargs[name] = Distribution.from_mapping(value)
        if isinstance(kwargs.get("drop_policy"), str):
            try:
                kwargs["drop_policy"] = DropPolicy(kwargs["drop_policy"].lower())
            except ValueError as exc:
                raise InvalidConfiguration(f"Unknown drop_policy {kwargs['drop_policy']!r}") from exc
        return cls(**kwargs)
