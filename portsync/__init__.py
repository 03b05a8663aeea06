"""
portsync - keep an SSH port-forwarding tunnel to a docker-machine host in
sync with the ports its containers publish.

Containers are polled continuously; whenever the set of published ports
changes, the tunnel is replaced by one forwarding exactly the new set.
"""

__version__ = "0.1.0"

from .core.domain.ports import ForwardedPortSet, PortMapping
from .core.exceptions import (
    PortsyncError, RemoteExecError, DecodeError, TunnelStartError, TerminationError
)
from .core.services.extractor import PortSetExtractor
from .core.services.reconciler import Reconciler, ReconcilerState
from .application.lifecycle import LifecycleController, ShutdownReport

__all__ = [
    "ForwardedPortSet",
    "PortMapping",
    "PortsyncError",
    "RemoteExecError",
    "DecodeError",
    "TunnelStartError",
    "TerminationError",
    "PortSetExtractor",
    "Reconciler",
    "ReconcilerState",
    "LifecycleController",
    "ShutdownReport",
]
