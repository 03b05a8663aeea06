"""
Interfaces for the external collaborators the core drives.

The remote executor runs commands against the target host; the tunnel
process provider spawns and kills the forwarding process. Neither knows
anything about containers or reconciliation.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, List, Optional, Sequence

from ..domain.ports import PortMapping


@dataclass
class TunnelHandle:
    """Reference to one running forwarding process."""
    pid: Optional[int]
    command: List[str]
    process: Any = field(default=None, repr=False, compare=False)


class IRemoteExecutor(ABC):
    """Run a command against a host and capture its output."""

    @abstractmethod
    async def run(self, host: str, args: Sequence[str]) -> bytes:
        """
        Run a command on the host.

        Args:
            host: Host identifier
            args: Command and arguments to run on the host

        Returns:
            Captured standard output

        Raises:
            RemoteExecError: If the command could not be run or exited non-zero
        """
        pass


class ITunnelProcessProvider(ABC):
    """Start and kill forwarding processes."""

    @abstractmethod
    async def start_forwarding(
        self,
        host: str,
        mappings: Sequence[PortMapping]
    ) -> TunnelHandle:
        """
        Launch a forwarding process for the given mappings.

        Returns as soon as the process is launched; it does not wait for
        the tunnel to accept connections.

        Raises:
            TunnelStartError: If the process could not be launched
        """
        pass

    @abstractmethod
    async def kill(self, handle: TunnelHandle) -> None:
        """
        Kill the process behind the handle and reap it.

        Raises:
            TerminationError: If the process could not be killed
        """
        pass
