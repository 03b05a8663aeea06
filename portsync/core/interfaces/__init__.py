"""
Core interfaces defining the contracts between the reconciler and its
collaborators.
"""

from .lifecycle import IHealthCheckable
from .forwarding import IContainerObserver, ITunnelSupervisor
from .remote import IRemoteExecutor, ITunnelProcessProvider, TunnelHandle

__all__ = [
    "IHealthCheckable",
    "IContainerObserver",
    "ITunnelSupervisor",
    "IRemoteExecutor",
    "ITunnelProcessProvider",
    "TunnelHandle",
]
