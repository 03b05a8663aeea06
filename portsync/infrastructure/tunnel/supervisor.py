"""
Supervisor owning the single forwarding tunnel to the host.
"""

import asyncio
from typing import Any, Dict, List, Optional

from loguru import logger

from ...core.domain.ports import ForwardedPortSet, PortMapping
from ...core.exceptions import TerminationError, TunnelStartError
from ...core.interfaces.forwarding import ITunnelSupervisor
from ...core.interfaces.remote import ITunnelProcessProvider, TunnelHandle

# docker-machine's TLS docker daemon port
DEFAULT_MANAGEMENT_PORT = 2376


class TunnelSupervisor(ITunnelSupervisor):
    """
    Starts, replaces and terminates the forwarding tunnel.

    At most one handle is owned at any time. A new tunnel is only started
    once the previous one is known to be gone, so the two never compete
    for the same local listening ports.
    """

    def __init__(
        self,
        provider: ITunnelProcessProvider,
        host: str,
        management_port: int = DEFAULT_MANAGEMENT_PORT
    ) -> None:
        self._provider = provider
        self._host = host
        self._management_port = str(management_port)
        self._handle: Optional[TunnelHandle] = None
        self._ports: Optional[ForwardedPortSet] = None
        self._lock = asyncio.Lock()
        self._start_count = 0
        self._last_error: Optional[str] = None

    @property
    def is_active(self) -> bool:
        return self._handle is not None

    @property
    def active_ports(self) -> Optional[ForwardedPortSet]:
        return self._ports

    @property
    def handle(self) -> Optional[TunnelHandle]:
        return self._handle

    def build_mappings(self, ports: ForwardedPortSet) -> List[PortMapping]:
        """Management port first, then one same-port mapping per port."""
        mappings = [PortMapping.same_port(self._management_port)]
        for port in ports:
            if port == self._management_port:
                logger.warning(
                    f"Port {port} is already forwarded as the management port")
                continue
            mappings.append(PortMapping.same_port(port))
        return mappings

    async def replace(self, ports: ForwardedPortSet) -> None:
        async with self._lock:
            await self._terminate_locked()

            mappings = self.build_mappings(ports)
            try:
                handle = await self._provider.start_forwarding(self._host, mappings)
            except TunnelStartError as e:
                self._last_error = e.message
                raise
            except Exception as e:
                self._last_error = str(e)
                raise TunnelStartError(
                    f"Starting tunnel to {self._host} failed: {e}") from e

            self._handle = handle
            self._ports = ports
            self._start_count += 1
            logger.info(f"Tunnel to {self._host} forwarding {ports} (pid {handle.pid})")

    async def terminate(self) -> None:
        async with self._lock:
            await self._terminate_locked()

    async def _terminate_locked(self) -> None:
        if self._handle is None:
            return

        try:
            await self._provider.kill(self._handle)
        except TerminationError as e:
            self._last_error = e.message
            raise
        except Exception as e:
            self._last_error = str(e)
            raise TerminationError(
                f"Terminating tunnel to {self._host} failed: {e}") from e

        self._handle = None
        self._ports = None

    async def check_health(self) -> Dict[str, Any]:
        """Check tunnel supervisor health."""
        return {
            'healthy': self._last_error is None,
            'status': 'active' if self.is_active else 'inactive',
            'details': {
                'host': self._host,
                'management_port': self._management_port,
                'forwarded_ports': list(self._ports) if self._ports is not None else [],
                'pid': self._handle.pid if self._handle else None,
                'tunnels_started': self._start_count,
                'last_error': self._last_error
            }
        }
