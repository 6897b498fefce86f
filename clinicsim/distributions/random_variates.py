"""Random-variate streams for the clinic network.

One SeedSequence is split into independent numpy Generators, one per
concern (arrivals, triage, consultation, urgency). Two generators built from
the same seed produce identical draws, which is what makes a whole run
reproducible.
"""

from __future__ import annotations

import logging
from typing import Optional

import numpy as np

from clinicsim.distributions.distribution import Distribution, Uniform
from clinicsim.errors import InvalidConfiguration

logger = logging.getLogger(__name__)

MAX_RESAMPLE_ATTEMPTS = 10_000

_URGENCY_DRAW = Uniform(0.0, 1.0)


class RandomVariateGenerator:
    """Samples inter-arrival times, service durations and urgency flags.

    Every duration returned is non-negative: negative draws are rejected and
    redrawn, which keeps the shape of the distribution on ``[0, inf)``
    instead of piling mass up at zero.

    Args:
        seed: Seed for the root SeedSequence. None draws fresh OS entropy.
        arrival: Inter-arrival time distribution.
        triage: Triage duration distribution.
        consultation: Consultation duration distribution.
        urgency_probability: Probability in ``[0, 1]`` that a patient is urgent.

    Raises:
        InvalidConfiguration: If a distribution can never produce a
            non-negative value or the probability is out of range.
    """

    def __init__(
        self,
        seed: Optional[int],
        arrival: Distribution,
        triage: Distribution,
        consultation: Distribution,
        urgency_probability: float,
    ):
        for name, dist in (("arrival", arrival), ("triage", triage), ("consultation", consultation)):
            if not isinstance(dist, Distribution):
                raise InvalidConfiguration(f"{name} must be a Distribution, got {dist!r}")
            if not dist.can_be_non_negative():
                raise InvalidConfiguration(f"{name} distribution {dist!r} never produces a non-negative value")
        if urgency_probability is None or not 0.0 <= urgency_probability <= 1.0:
            raise InvalidConfiguration(
                f"urgency_probability must be within [0, 1], got {urgency_probability!r}"
            )

        self.seed = seed
        self.arrival = arrival
        self.triage = triage
        self.consultation = consultation
        self.urgency_probability = float(urgency_probability)

        arrival_seq, triage_seq, consultation_seq, urgency_seq = np.random.SeedSequence(seed).spawn(4)
        self._arrival_rng = np.random.default_rng(arrival_seq)
        self._triage_rng = np.random.default_rng(triage_seq)
        self._consultation_rng = np.random.default_rng(consultation_seq)
        self._urgency_rng = np.random.default_rng(urgency_seq)

    @staticmethod
    def sample_non_negative(dist: Distribution, rng: np.random.Generator) -> float:
        """Draw from ``dist`` until the value is non-negative.

        Raises:
            InvalidConfiguration: If no admissible value turns up within
                MAX_RESAMPLE_ATTEMPTS draws.
        """
        for attempt in range(MAX_RESAMPLE_ATTEMPTS):
            value = dist.sample(rng)
            if value >= 0.0:
                if attempt:
                    logger.debug("Rejected %d negative draw(s) from %r", attempt, dist)
                return value
        raise InvalidConfiguration(
            f"{dist!r} produced no non-negative value in {MAX_RESAMPLE_ATTEMPTS} draws"
        )

    def inter_arrival_time(self) -> float:
        return self.sample_non_negative(self.arrival, self._arrival_rng)

    def triage_duration(self) -> float:
        return self.sample_non_negative(self.triage, self._triage_rng)

    def consultation_duration(self) -> float:
        return self.sample_non_negative(self.consultation, self._consultation_rng)

    def is_urgent(self) -> bool:
        """One Uniform(0, 1) draw; urgent when it does not exceed the probability.

        The draw is always taken so the urgency stream advances identically
        for every patient, whatever the probability.
        """
        draw = _URGENCY_DRAW.sample(self._urgency_rng)
        return self.urgency_probability > 0.0 and draw <= self.urgency_probability
