"""Tests for the curated clinicsim.api surface."""

from clinicsim import api


def test_simulate_from_mapping():
    config = api.NetworkConfig.from_mapping(
        {
            "horizon": 240,
            "arrival": {"kind": "exponential", "rate": 0.1},
            "consultation": {"kind": "uniform", "low": 10, "high": 30},
            "num_offices": 3,
            "seed": 17,
        }
    )
    recorder = api.TraceRecorder()
    snapshot = api.simulate(config, observer=recorder)

    assert isinstance(snapshot, api.StatisticsSnapshot)
    assert 0 < len(recorder) <= snapshot.events_dispatched
    assert len(snapshot.offices) == 3
    assert snapshot.conservation_holds()
    assert snapshot.to_dict()["arrived"] == snapshot.arrived
