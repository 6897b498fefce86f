"""Clinic network orchestration: configuration, routing and event handlers."""

from clinicsim.network.config import DropPolicy, NetworkConfig
from clinicsim.network.network import DROP_NO_OFFICE, DROP_RECEPTION_FULL, ClinicNetwork
from clinicsim.network.routing import RoutingPolicy

__all__ = [
    "ClinicNetwork",
    "DROP_NO_OFFICE",
    "DROP_RECEPTION_FULL",
    "DropPolicy",
    "NetworkConfig",
    "RoutingPolicy",
]
