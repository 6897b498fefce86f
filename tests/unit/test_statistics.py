"""Tests for Count and Tally accumulators."""

import statistics

import pytest

from clinicsim.instrumentation import Count, Tally


class TestCount:
    def test_increments(self):
        count = Count("served")
        count.update()
        count.update(3)
        assert count.value == 4

    def test_is_monotonic(self):
        count = Count("served")
        with pytest.raises(ValueError):
            count.update(-1)


class TestTally:
    def test_empty(self):
        tally = Tally("wait")
        assert tally.count == 0
        assert tally.mean == 0.0
        assert tally.variance == 0.0
        assert tally.min == 0.0 and tally.max == 0.0

    def test_matches_statistics_module(self):
        values = [5.0, 15.0, 25.0, 2.5, 40.0]
        tally = Tally("wait")
        for v in values:
            tally.update(v)

        assert tally.count == 5
        assert tally.mean == pytest.approx(statistics.mean(values))
        assert tally.variance == pytest.approx(statistics.variance(values))
        assert tally.std_dev == pytest.approx(statistics.stdev(values))
        assert tally.min == 2.5
        assert tally.max == 40.0

    def test_single_value_has_zero_variance(self):
        tally = Tally("wait")
        tally.update(7.0)
        assert tally.variance == 0.0
        assert tally.to_dict()["mean"] == 7.0
