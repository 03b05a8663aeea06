"""
Forwarding processes spawned through ``docker-machine ssh``.
"""

import asyncio
from typing import List, Sequence

from loguru import logger

from ...core.domain.ports import PortMapping
from ...core.exceptions import TerminationError, TunnelStartError
from ...core.interfaces.remote import ITunnelProcessProvider, TunnelHandle
from ..remote.machine import DEFAULT_MACHINE_BINARY


class SSHTunnelProcessProvider(ITunnelProcessProvider):
    """
    Spawns ``docker-machine ssh <host> -N -L ...`` processes.

    The process inherits this process's stdout and stderr so ssh's
    diagnostics reach the terminal; its output is never read here.
    """

    def __init__(
        self,
        machine_binary: str = DEFAULT_MACHINE_BINARY,
        verbose: bool = True
    ) -> None:
        self._machine_binary = machine_binary
        self._verbose = verbose

    def build_command(self, host: str, mappings: Sequence[PortMapping]) -> List[str]:
        """Build the command line for a tunnel forwarding ``mappings``."""
        # -N: forward only, no remote shell
        command = [self._machine_binary, "ssh", host, "-N"]
        if self._verbose:
            command.append("-vvv")

        for mapping in mappings:
            command.extend(["-L", mapping.to_ssh_argument()])

        return command

    async def start_forwarding(
        self,
        host: str,
        mappings: Sequence[PortMapping]
    ) -> TunnelHandle:
        command = self.build_command(host, mappings)
        logger.info(f"Running SSH forwarding command {' '.join(command)}")

        try:
            process = await asyncio.create_subprocess_exec(*command)
        except OSError as e:
            raise TunnelStartError(
                f"Starting SSH forwarding to {host} failed: {e}",
                details={'command': command}
            ) from e

        logger.debug(f"SSH forwarding process started with pid {process.pid}")
        return TunnelHandle(pid=process.pid, command=command, process=process)

    async def kill(self, handle: TunnelHandle) -> None:
        process = handle.process
        if process is None or process.returncode is not None:
            logger.debug(f"SSH process {handle.pid} already exited")
            return

        logger.info("Killing existing SSH process...")
        try:
            process.kill()
        except ProcessLookupError:
            # Exited between the returncode check and the kill
            pass
        except OSError as e:
            raise TerminationError(
                f"Killing existing SSH process {handle.pid} failed: {e}",
                details={'pid': handle.pid}
            ) from e

        await process.wait()
        logger.debug(f"SSH process {handle.pid} exited with {process.returncode}")
