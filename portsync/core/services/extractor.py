"""
Derive the forwarded port set from container inspection data.
"""

from typing import FrozenSet, List, Optional

from loguru import logger
from pydantic import TypeAdapter, ValidationError

from ..domain.containers import ContainerRecord
from ..domain.ports import ForwardedPortSet
from ..exceptions import DecodeError

# Bindings on any other interface are not reachable through the host's
# loopback, so forwarding them would do nothing.
FORWARDABLE_HOST_IPS: FrozenSet[str] = frozenset({
    "127.0.0.1",
    "0.0.0.0",
    "::1",
    "::",
})

_containers_adapter = TypeAdapter(Optional[List[ContainerRecord]])


class PortSetExtractor:
    """Turns raw ``docker inspect`` output into a ForwardedPortSet."""

    def __init__(self, forwardable_host_ips: FrozenSet[str] = FORWARDABLE_HOST_IPS) -> None:
        self._forwardable_host_ips = forwardable_host_ips

    def decode(self, payload: Optional[bytes]) -> List[ContainerRecord]:
        """
        Decode an inspection payload into container records.

        Args:
            payload: Raw JSON array as printed by ``docker inspect``

        Returns:
            Container records; empty for an absent or empty payload

        Raises:
            DecodeError: If the payload is not an array of container objects
        """
        if payload is None or not payload.strip():
            return []

        try:
            containers = _containers_adapter.validate_json(payload)
        except ValidationError as e:
            raise DecodeError(
                f"Invalid container inspection data: {e.error_count()} error(s)",
                details=e.errors(include_url=False)
            ) from e

        return containers or []

    def extract(self, payload: Optional[bytes]) -> ForwardedPortSet:
        """
        Extract the host ports that should be forwarded.

        Raises:
            DecodeError: If the payload cannot be decoded
        """
        ports = []
        for container in self.decode(payload):
            for binding in container.bindings():
                if not binding.host_port:
                    continue
                if binding.host_ip in self._forwardable_host_ips:
                    ports.append(binding.host_port)
                else:
                    logger.debug(
                        f"Skipping {binding.host_ip}:{binding.host_port} "
                        f"of container {container.id[:12] or '<unknown>'}")

        return ForwardedPortSet.of(ports)
