"""
Capability interfaces composed by the reconciler.

Observing containers and owning the tunnel are separate capabilities so
each can be substituted on its own.
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from ..domain.ports import ForwardedPortSet
from .lifecycle import IHealthCheckable


class IContainerObserver(ABC):
    """Read container state from the remote host."""

    @abstractmethod
    async def list_container_ids(self) -> List[str]:
        """
        List the identifiers of all containers on the host.

        Raises:
            RemoteExecError: If the listing command failed
        """
        pass

    @abstractmethod
    async def inspect_all(self, ids: Sequence[str]) -> Optional[bytes]:
        """
        Fetch inspection data for the given containers in one call.

        Returns:
            Raw inspection payload, or None when ``ids`` is empty

        Raises:
            RemoteExecError: If the inspection command failed
        """
        pass


class ITunnelSupervisor(IHealthCheckable):
    """Own the single forwarding tunnel to the host."""

    @abstractmethod
    async def replace(self, ports: ForwardedPortSet) -> None:
        """
        Replace the active tunnel with one forwarding ``ports``.

        Any active tunnel is terminated before the new one is started.

        Raises:
            TerminationError: If the old tunnel could not be terminated;
                no new tunnel is started in that case
            TunnelStartError: If the new tunnel could not be started
        """
        pass

    @abstractmethod
    async def terminate(self) -> None:
        """
        Terminate the active tunnel, if any.

        Raises:
            TerminationError: If the tunnel could not be terminated
        """
        pass

    @property
    @abstractmethod
    def is_active(self) -> bool:
        """Whether a tunnel is currently owned."""
        pass

    @property
    @abstractmethod
    def active_ports(self) -> Optional[ForwardedPortSet]:
        """Ports forwarded by the active tunnel, or None when inactive."""
        pass
