"""Statistics, snapshots and trace observers."""

from clinicsim.instrumentation.statistics import Count, Tally
from clinicsim.instrumentation.summary import OfficeStats, ReceptionistStats, StatisticsSnapshot
from clinicsim.instrumentation.trace import NullTraceRecorder, TraceRecorder, TransitionRecord

__all__ = [
    "Count",
    "NullTraceRecorder",
    "OfficeStats",
    "ReceptionistStats",
    "StatisticsSnapshot",
    "Tally",
    "TraceRecorder",
    "TransitionRecord",
]
