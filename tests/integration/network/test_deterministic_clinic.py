"""End-to-end run of a clinic whose every duration is constant.

One office, one receptionist. Patients arrive at 0, 10, ..., 50, triage takes
5 and a consultation takes 20, so by t=60 the office has finished two
patients, is consulting a third and has three more queued.
"""

import pytest

from clinicsim import ClinicNetwork, EventKind, TraceRecorder, simulate


class TestDeterministicClinic:
    def test_counts(self, deterministic_config):
        snapshot = simulate(deterministic_config)

        assert snapshot.end_time == 60.0
        assert snapshot.arrived == 6
        assert snapshot.served == 2
        assert snapshot.dropped == 0
        assert snapshot.in_triage == 0
        assert snapshot.in_consultation == 1
        assert snapshot.waiting == 3
        assert snapshot.conservation_holds()

    def test_waiting_and_system_times(self, deterministic_config):
        snapshot = simulate(deterministic_config)

        waiting = snapshot.tallies["waiting_time"]
        assert waiting["count"] == 3
        assert waiting["mean"] == pytest.approx(15.0)
        assert waiting["min"] == pytest.approx(5.0)
        assert waiting["max"] == pytest.approx(25.0)
        assert snapshot.average_waiting_time == pytest.approx(15.0)
        assert snapshot.average_system_time == pytest.approx(30.0)
        assert snapshot.average_triage_wait == pytest.approx(0.0)

    def test_office_statistics(self, deterministic_config):
        snapshot = simulate(deterministic_config)
        office = snapshot.office(1)

        assert office.id == "O-1"
        assert office.served == 2
        assert office.occupied_time == pytest.approx(40.0)
        assert office.utilisation == pytest.approx(40.0 / 60.0)
        # queue holds 1 on [15,35), 2 on [35,55), 3 on [55,60)
        assert office.average_queue_length == pytest.approx(1.25)
        assert office.peak_queue_length == 3
        assert office.queue_length == 3

    def test_reception_statistics(self, deterministic_config):
        snapshot = simulate(deterministic_config)

        assert snapshot.reception_average_queue_length == pytest.approx(0.0)
        receptionist = snapshot.receptionists[0]
        assert receptionist.id == "R-1"
        assert receptionist.served == 6
        assert receptionist.busy_time == pytest.approx(30.0)

    def test_trace_order(self, deterministic_config):
        recorder = TraceRecorder()
        simulate(deterministic_config, observer=recorder)

        times = [r.time for r in recorder]
        assert times == sorted(times)
        assert len(recorder.of_kind(EventKind.ARRIVAL)) == 6
        assert len(recorder.of_kind(EventKind.TRIAGE_END)) == 6
        assert len(recorder.of_kind(EventKind.CONSULTATION_END)) == 2

        first_end = recorder.of_kind(EventKind.TRIAGE_END)[0]
        assert first_end.time == 5.0
        assert first_end.entity_ids == ("P-000001", "R-1", "O-1")

    def test_transitions_name_their_entities(self, deterministic_config):
        recorder = TraceRecorder()
        simulate(deterministic_config, observer=recorder)

        patients = [f"P-00000{n}" for n in range(1, 7)]
        assert [r.entity_ids for r in recorder.of_kind(EventKind.TRIAGE_START)] == [
            (p, "R-1") for p in patients
        ]
        assert [r.entity_ids for r in recorder.of_kind(EventKind.CONSULTATION_START)] == [
            (p, "O-1") for p in patients[:3]
        ]
        assert [r.time for r in recorder.of_kind(EventKind.CONSULTATION_START)] == [5.0, 25.0, 45.0]
        assert all(r.entity_ids for r in recorder)

    def test_departed_patients(self, deterministic_config):
        departed = []
        ClinicNetwork(deterministic_config, on_departure=departed.append).run()

        assert [p.id for p in departed] == ["P-000001", "P-000002"]
        assert [p.consultation_end.to_minutes() for p in departed] == [25.0, 45.0]
        assert all(p.timestamps_ordered() for p in departed)

    def test_wake_ups_that_change_nothing_are_not_traced(self, deterministic_config):
        recorder = TraceRecorder()
        snapshot = simulate(deterministic_config, observer=recorder)

        # two consultation wake-ups at t=25 and t=45 find the office already claimed
        assert len(recorder) == 23
        assert snapshot.events_dispatched == 25
