"""
Fakes for the reconciliation tests.

The fakes stand in for the remote host and the ssh process so the loop
can be exercised without docker-machine.
"""

import asyncio
import json
from typing import Any, Dict, List, Optional, Sequence, Tuple

from portsync.core.domain.ports import ForwardedPortSet, PortMapping
from portsync.core.interfaces.forwarding import IContainerObserver, ITunnelSupervisor
from portsync.core.interfaces.remote import IRemoteExecutor, ITunnelProcessProvider, TunnelHandle


def inspect_payload(*containers: Dict[str, List[Tuple[str, str]]]) -> bytes:
    """Build a ``docker inspect`` payload from {spec: [(host_ip, host_port)]}."""
    records = []
    for index, ports in enumerate(containers):
        records.append({
            "Id": f"container{index}",
            "Name": f"/container{index}",
            "NetworkSettings": {
                "Ports": {
                    spec: [{"HostIp": ip, "HostPort": port} for ip, port in bindings]
                    for spec, bindings in ports.items()
                }
            }
        })
    return json.dumps(records).encode()


class FakeObserver(IContainerObserver):
    """
    Replays one payload per cycle and sets ``stop`` on the last one.

    A payload of None stands for a host with no containers.
    """

    def __init__(
        self,
        payloads: Sequence[Optional[bytes]],
        stop: Optional[asyncio.Event] = None,
        list_error: Optional[Exception] = None,
        inspect_error: Optional[Exception] = None
    ) -> None:
        self._payloads = list(payloads) or [None]
        self._stop = stop
        self._current: Optional[bytes] = None
        self.list_error = list_error
        self.inspect_error = inspect_error
        self.list_calls = 0
        self.inspect_calls = 0

    async def list_container_ids(self) -> List[str]:
        self.list_calls += 1
        if self.list_error is not None:
            raise self.list_error

        index = min(self.list_calls - 1, len(self._payloads) - 1)
        self._current = self._payloads[index]
        if self._stop is not None and self.list_calls >= len(self._payloads):
            self._stop.set()

        return [] if self._current is None else ["container0"]

    async def inspect_all(self, ids: Sequence[str]) -> Optional[bytes]:
        self.inspect_calls += 1
        if self.inspect_error is not None:
            raise self.inspect_error
        if not ids:
            return None
        return self._current


class FakeSupervisor(ITunnelSupervisor):
    """Records replace/terminate calls in order."""

    def __init__(
        self,
        replace_error: Optional[Exception] = None,
        terminate_error: Optional[Exception] = None,
        fail_on_replace: int = 0
    ) -> None:
        self.calls: List[Tuple[str, Optional[ForwardedPortSet]]] = []
        self.replace_error = replace_error
        self.terminate_error = terminate_error
        # 1-based replace call that fails; 0 means every call when replace_error is set
        self.fail_on_replace = fail_on_replace
        self._ports: Optional[ForwardedPortSet] = None

    @property
    def replaced(self) -> List[ForwardedPortSet]:
        return [ports for name, ports in self.calls if name == "replace" and ports is not None]

    @property
    def terminate_count(self) -> int:
        return sum(1 for name, _ in self.calls if name == "terminate")

    @property
    def is_active(self) -> bool:
        return self._ports is not None

    @property
    def active_ports(self) -> Optional[ForwardedPortSet]:
        return self._ports

    async def replace(self, ports: ForwardedPortSet) -> None:
        self.calls.append(("replace", ports))
        attempt = len(self.replaced)
        if self.replace_error is not None and self.fail_on_replace in (0, attempt):
            raise self.replace_error
        self._ports = ports

    async def terminate(self) -> None:
        self.calls.append(("terminate", None))
        if self.terminate_error is not None:
            raise self.terminate_error
        self._ports = None

    async def check_health(self) -> Dict[str, Any]:
        return {'healthy': True, 'status': 'active' if self.is_active else 'inactive', 'details': {}}


class FakeProcessProvider(ITunnelProcessProvider):
    """Hands out numbered handles and tracks which are still live."""

    def __init__(
        self,
        start_error: Optional[Exception] = None,
        kill_error: Optional[Exception] = None
    ) -> None:
        self.start_error = start_error
        self.kill_error = kill_error
        self.events: List[Tuple[str, int]] = []
        self.started: List[List[PortMapping]] = []
        self.live: Dict[int, TunnelHandle] = {}
        self.max_live = 0
        self._next_pid = 1000

    async def start_forwarding(self, host: str, mappings: Sequence[PortMapping]) -> TunnelHandle:
        if self.start_error is not None:
            raise self.start_error

        self._next_pid += 1
        handle = TunnelHandle(
            pid=self._next_pid,
            command=["ssh", host] + [m.to_ssh_argument() for m in mappings])
        self.started.append(list(mappings))
        self.live[handle.pid] = handle
        self.max_live = max(self.max_live, len(self.live))
        self.events.append(("start", handle.pid))
        return handle

    async def kill(self, handle: TunnelHandle) -> None:
        if self.kill_error is not None:
            raise self.kill_error
        self.live.pop(handle.pid, None)
        self.events.append(("kill", handle.pid))


class FakeExecutor(IRemoteExecutor):
    """Returns canned output per command and records what was run."""

    def __init__(self, outputs: Optional[Dict[Tuple[str, ...], Any]] = None) -> None:
        self.outputs = outputs or {}
        self.calls: List[Tuple[str, List[str]]] = []

    async def run(self, host: str, args: Sequence[str]) -> bytes:
        self.calls.append((host, list(args)))
        result = self.outputs.get(tuple(args), b"")
        if isinstance(result, Exception):
            raise result
        return result
