"""
Core module containing the reconciliation logic, domain models and the
interfaces of its collaborators, independent of how commands are run or
tunnels are spawned.
"""

from .domain import ContainerRecord, PortBinding, ForwardedPortSet, PortMapping, has_changed
from .exceptions import (
    PortsyncError, RemoteExecError, DecodeError, TunnelStartError, TerminationError
)
from .interfaces import IContainerObserver, ITunnelSupervisor, IRemoteExecutor, ITunnelProcessProvider

__all__ = [
    "ContainerRecord",
    "PortBinding",
    "ForwardedPortSet",
    "PortMapping",
    "has_changed",
    "PortsyncError",
    "RemoteExecError",
    "DecodeError",
    "TunnelStartError",
    "TerminationError",
    "IContainerObserver",
    "ITunnelSupervisor",
    "IRemoteExecutor",
    "ITunnelProcessProvider",
]
