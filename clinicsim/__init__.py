"""clinicsim: discrete-event simulation of a triage-and-consultation clinic."""

import logging

from clinicsim.api import simulate
from clinicsim.core import Event, EventHeap, EventKind, EventScheduler, Instant
from clinicsim.distributions import (
    Constant,
    Distribution,
    Exponential,
    Normal,
    RandomVariateGenerator,
    Uniform,
)
from clinicsim.entities import BoundedQueue, Office, Patient, PatientState, Receptionist
from clinicsim.errors import (
    ClinicSimError,
    InvalidConfiguration,
    NullEntityReference,
    QueueEmpty,
    QueueFull,
    SchedulingError,
)
from clinicsim.instrumentation import (
    Count,
    NullTraceRecorder,
    OfficeStats,
    ReceptionistStats,
    StatisticsSnapshot,
    Tally,
    TraceRecorder,
    TransitionRecord,
)
from clinicsim.logging_config import (
    configure_from_env,
    disable_logging,
    enable_console_logging,
    enable_file_logging,
    enable_json_logging,
    set_level,
    set_module_level,
)
from clinicsim.network import ClinicNetwork, DropPolicy, NetworkConfig, RoutingPolicy

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    "BoundedQueue",
    "ClinicNetwork",
    "ClinicSimError",
    "Constant",
    "Count",
    "Distribution",
    "DropPolicy",
    "Event",
    "EventHeap",
    "EventKind",
    "EventScheduler",
    "Exponential",
    "Instant",
    "InvalidConfiguration",
    "NetworkConfig",
    "Normal",
    "NullEntityReference",
    "NullTraceRecorder",
    "Office",
    "OfficeStats",
    "Patient",
    "PatientState",
    "QueueEmpty",
    "QueueFull",
    "RandomVariateGenerator",
    "Receptionist",
    "ReceptionistStats",
    "RoutingPolicy",
    "SchedulingError",
    "StatisticsSnapshot",
    "Tally",
    "TraceRecorder",
    "TransitionRecord",
    "Uniform",
    "configure_from_env",
    "disable_logging",
    "enable_console_logging",
    "enable_file_logging",
    "enable_json_logging",
    "set_level",
    "set_module_level",
    "simulate",
]
