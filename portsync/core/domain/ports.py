"""
Forwarded port values.

ForwardedPortSet is the canonical form of "ports that need forwarding";
PortMapping is one ``-L`` endpoint pair handed to the tunnel process.
"""

from dataclasses import dataclass
from typing import Iterable, Iterator, Tuple

LOOPBACK_HOST = "127.0.0.1"


def _port_sort_key(port: str) -> Tuple[int, int, str]:
    if port.isdigit():
        return (0, int(port), port)
    return (1, 0, port)


@dataclass(frozen=True)
class ForwardedPortSet:
    """
    Sorted, duplicate-free tuple of host port strings.

    Ports made only of digits sort numerically and come first; anything
    else sorts lexically after them. Two sets holding the same ports in
    any input order compare equal.
    """
    ports: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        canonical = tuple(sorted(set(self.ports), key=_port_sort_key))
        object.__setattr__(self, 'ports', canonical)

    @classmethod
    def of(cls, ports: Iterable[str]) -> 'ForwardedPortSet':
        """Build a canonical set from any iterable of port strings."""
        return cls(tuple(ports))

    @classmethod
    def empty(cls) -> 'ForwardedPortSet':
        return cls()

    def __iter__(self) -> Iterator[str]:
        return iter(self.ports)

    def __len__(self) -> int:
        return len(self.ports)

    def __contains__(self, port: object) -> bool:
        return port in self.ports

    def __str__(self) -> str:
        return "[" + ", ".join(self.ports) + "]"


def has_changed(current: ForwardedPortSet, candidate: ForwardedPortSet) -> bool:
    """
    Return True when the candidate set differs from the current one.

    Both sets are canonical, so an ordered comparison (same length, same
    port at every position) is enough.
    """
    if len(current) != len(candidate):
        return True
    return any(a != b for a, b in zip(current, candidate))


@dataclass(frozen=True)
class PortMapping:
    """A local port forwarded to a port on the remote host's loopback."""
    local_port: str
    remote_port: str
    remote_host: str = LOOPBACK_HOST

    @classmethod
    def same_port(cls, port: str) -> 'PortMapping':
        """Map a port to the same port number on the remote side."""
        return cls(local_port=port, remote_port=port)

    def to_ssh_argument(self) -> str:
        """Render as the value of an ssh ``-L`` option."""
        return f"{self.local_port}:{self.remote_host}:{self.remote_port}"
