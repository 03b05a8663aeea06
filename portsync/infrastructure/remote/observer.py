"""
Container observer reading container state from a remote docker host.
"""

from typing import List, Optional, Sequence

from ...core.exceptions import RemoteExecError
from ...core.interfaces.forwarding import IContainerObserver
from ...core.interfaces.remote import IRemoteExecutor


class ContainerObserver(IContainerObserver):
    """
    Lists and inspects containers on one host via a remote executor.

    By default stopped containers are listed as well (``docker ps -a``),
    matching what ``docker inspect`` reports for them: no published ports.
    """

    def __init__(
        self,
        executor: IRemoteExecutor,
        host: str,
        include_stopped: bool = True
    ) -> None:
        self._executor = executor
        self._host = host
        self._include_stopped = include_stopped

    @property
    def host(self) -> str:
        return self._host

    def _list_command(self) -> List[str]:
        flags = "-aq" if self._include_stopped else "-q"
        return ["docker", "ps", flags]

    async def list_container_ids(self) -> List[str]:
        try:
            output = await self._executor.run(self._host, self._list_command())
        except RemoteExecError as e:
            raise RemoteExecError(
                f"Listing containers on {self._host} failed: {e.message}",
                command=e.command,
                returncode=e.returncode,
                stderr=e.stderr
            ) from e

        return output.decode(errors="replace").split()

    async def inspect_all(self, ids: Sequence[str]) -> Optional[bytes]:
        if not ids:
            return None

        try:
            return await self._executor.run(self._host, ["docker", "inspect", *ids])
        except RemoteExecError as e:
            raise RemoteExecError(
                f"Inspecting {len(ids)} container(s) on {self._host} failed: {e.message}",
                command=e.command,
                returncode=e.returncode,
                stderr=e.stderr
            ) from e
