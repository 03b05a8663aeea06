"""
Remote command execution through ``docker-machine ssh``.
"""

import asyncio
from typing import List, Sequence

from loguru import logger

from ...core.exceptions import RemoteExecError
from ...core.interfaces.remote import IRemoteExecutor

DEFAULT_MACHINE_BINARY = "docker-machine"


class DockerMachineExecutor(IRemoteExecutor):
    """Runs commands on a docker-machine host and captures stdout."""

    def __init__(self, machine_binary: str = DEFAULT_MACHINE_BINARY) -> None:
        self._machine_binary = machine_binary

    @property
    def machine_binary(self) -> str:
        return self._machine_binary

    def build_command(self, host: str, args: Sequence[str]) -> List[str]:
        """Build the local command line that runs ``args`` on ``host``."""
        return [self._machine_binary, "ssh", host, *args]

    async def run(self, host: str, args: Sequence[str]) -> bytes:
        command = self.build_command(host, args)
        logger.trace(f"Running {' '.join(command)}")

        # Own session so a terminal Ctrl-C reaches only portsync.
        try:
            process = await asyncio.create_subprocess_exec(
                *command,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                start_new_session=True
            )
        except OSError as e:
            raise RemoteExecError(
                f"Could not run {self._machine_binary}: {e}",
                command=command
            ) from e

        try:
            stdout, stderr = await process.communicate()
        except BaseException:
            await self._abort(process)
            raise

        if process.returncode != 0:
            error_output = stderr.decode(errors="replace").strip()
            raise RemoteExecError(
                f"Command '{' '.join(args)}' on {host} exited with status "
                f"{process.returncode}: {error_output or 'no error output'}",
                command=command,
                returncode=process.returncode,
                stderr=error_output
            )

        return stdout

    async def _abort(self, process: asyncio.subprocess.Process) -> None:
        """Kill and reap a child whose output is no longer wanted."""
        if process.returncode is None:
            logger.debug(f"Killing abandoned remote command (pid {process.pid})")
            try:
                process.kill()
            except ProcessLookupError:
                pass
        await process.wait()
