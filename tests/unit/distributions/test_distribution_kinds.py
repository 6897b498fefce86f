"""Tests for the parametric distributions."""

import numpy as np
import pytest

from clinicsim.distributions import Constant, Distribution, Exponential, Normal, Uniform
from clinicsim.errors import InvalidConfiguration


class TestValidation:
    @pytest.mark.parametrize("rate", [0, -1.0, float("inf"), float("nan")])
    def test_exponential_rate_must_be_positive_and_finite(self, rate):
        with pytest.raises(InvalidConfiguration):
            Exponential(rate)

    def test_normal_stddev_cannot_be_negative(self):
        with pytest.raises(InvalidConfiguration):
            Normal(10.0, -1.0)

    def test_uniform_bounds_must_be_ordered(self):
        with pytest.raises(InvalidConfiguration):
            Uniform(5.0, 1.0)


class TestSampling:
    def test_constant_ignores_rng(self):
        rng = np.random.default_rng(0)
        assert [Constant(4.0).sample(rng) for _ in range(3)] == [4.0, 4.0, 4.0]

    def test_exponential_mean(self):
        rng = np.random.default_rng(42)
        dist = Exponential.from_mean(15.0)
        draws = [dist.sample(rng) for _ in range(20_000)]
        assert dist.expected_value() == pytest.approx(15.0)
        assert np.mean(draws) == pytest.approx(15.0, rel=0.05)

    def test_uniform_stays_in_bounds(self):
        rng = np.random.default_rng(1)
        dist = Uniform(2.0, 3.0)
        draws = [dist.sample(rng) for _ in range(1_000)]
        assert min(draws) >= 2.0
        assert max(draws) < 3.0


class TestNonNegativeSupport:
    def test_constant_negative_has_no_support(self):
        assert not Constant(-1.0).can_be_non_negative()

    def test_degenerate_negative_normal_has_no_support(self):
        assert not Normal(-5.0, 0.0).can_be_non_negative()
        assert Normal(-5.0, 1.0).can_be_non_negative()

    def test_negative_uniform_has_no_support(self):
        assert not Uniform(-3.0, -1.0).can_be_non_negative()
        assert Uniform(-3.0, 0.5).can_be_non_negative()


class TestFromMapping:
    def test_builds_each_kind(self):
        assert Distribution.from_mapping({"kind": "constant", "value": 5}) == Constant(5)
        assert Distribution.from_mapping({"kind": "Normal", "mean": 20, "stddev": 5}) == Normal(20, 5)
        assert Distribution.from_mapping({"kind": "uniform", "low": 0, "high": 1}) == Uniform(0, 1)
        assert Distribution.from_mapping({"kind": "exponential", "rate": 0.5}) == Exponential(0.5)
        assert Distribution.from_mapping({"kind": "exponential", "mean": 4}) == Exponential(0.25)

    def test_unknown_kind(self):
        with pytest.raises(InvalidConfiguration, match="Unknown distribution kind"):
            Distribution.from_mapping({"kind": "weibull", "shape": 2})

    def test_bad_parameters(self):
        with pytest.raises(InvalidConfiguration, match="Bad parameters"):
            Distribution.from_mapping({"kind": "normal", "mu": 20})
