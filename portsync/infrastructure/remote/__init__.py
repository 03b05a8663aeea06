"""
Remote host access: command execution and container observation.
"""

from .machine import DockerMachineExecutor, DEFAULT_MACHINE_BINARY
from .observer import ContainerObserver

__all__ = [
    "DockerMachineExecutor",
    "DEFAULT_MACHINE_BINARY",
    "ContainerObserver",
]
