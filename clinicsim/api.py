"""Curated public API surface for end-users.

    from clinicsim.api import NetworkConfig, simulate

    snapshot = simulate(NetworkConfig(seed=7))
"""

from __future__ import annotations

from typing import Optional

from clinicsim.core import EventKind, Instant, Observer
from clinicsim.distributions import Constant, Exponential, Normal, Uniform
from clinicsim.errors import InvalidConfiguration, NullEntityReference
from clinicsim.instrumentation import StatisticsSnapshot, TraceRecorder
from clinicsim.network import ClinicNetwork, DropPolicy, NetworkConfig


def simulate(config: NetworkConfig, observer: Optional[Observer] = None) -> StatisticsSnapshot:
    """Build a ClinicNetwork for ``config``, run it to the horizon and return its snapshot."""
    return ClinicNetwork(config, observer=observer).run()


__all__ = [
    "ClinicNetwork",
    "Constant",
    "DropPolicy",
    "EventKind",
    "Exponential",
    "Instant",
    "InvalidConfiguration",
    "NetworkConfig",
    "Normal",
    "NullEntityReference",
    "StatisticsSnapshot",
    "TraceRecorder",
    "Uniform",
    "simulate",
]
