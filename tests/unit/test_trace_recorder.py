"""Tests for the trace observers."""

from clinicsim.core import EventKind
from clinicsim.instrumentation import NullTraceRecorder, TraceRecorder


def test_records_in_order_and_filters():
    recorder = TraceRecorder()
    recorder(0.0, EventKind.ARRIVAL, ())
    recorder(0.0, EventKind.TRIAGE_START, ())
    recorder(5.0, EventKind.TRIAGE_END, ("P-000001", "R-1"))

    assert len(recorder) == 3
    assert [r.kind for r in recorder] == [EventKind.ARRIVAL, EventKind.TRIAGE_START, EventKind.TRIAGE_END]
    assert recorder.of_kind(EventKind.TRIAGE_END)[0].time == 5.0
    assert len(recorder.involving("R-1")) == 1

    recorder.clear()
    assert len(recorder) == 0


def test_null_recorder_accepts_calls():
    assert NullTraceRecorder()(1.0, EventKind.ARRIVAL, ()) is None
