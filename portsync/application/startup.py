"""
Application assembly.

Builds the collaborators for one target host from the configuration and
hands them to the lifecycle controller.
"""

from loguru import logger

from ..core.services.extractor import PortSetExtractor
from ..core.services.reconciler import Reconciler
from ..infrastructure.config.models import ApplicationConfig
from ..infrastructure.remote.machine import DockerMachineExecutor
from ..infrastructure.remote.observer import ContainerObserver
from ..infrastructure.tunnel.process import SSHTunnelProcessProvider
from ..infrastructure.tunnel.supervisor import TunnelSupervisor
from .lifecycle import LifecycleController


class ApplicationStartup:
    """Wires the forwarder components for a single host."""

    def __init__(self, config: ApplicationConfig) -> None:
        self._config = config

    def build(self, host: str) -> LifecycleController:
        """
        Build a lifecycle controller forwarding ports from ``host``.

        Args:
            host: docker-machine host name

        Returns:
            Controller ready to run
        """
        machine = self._config.machine

        executor = DockerMachineExecutor(machine.binary)
        observer = ContainerObserver(
            executor, host, include_stopped=machine.include_stopped)

        provider = SSHTunnelProcessProvider(
            machine.binary, verbose=machine.ssh_verbose)
        supervisor = TunnelSupervisor(
            provider, host, management_port=machine.management_port)

        reconciler = Reconciler(
            observer,
            PortSetExtractor(),
            supervisor,
            poll_interval=self._config.reconciler.poll_interval
        )

        logger.debug(
            f"Configured forwarder for {host} using {machine.binary} "
            f"(management port {machine.management_port})")

        return LifecycleController(
            reconciler,
            supervisor,
            shutdown_timeout=self._config.reconciler.shutdown_timeout
        )

    async def run(self, host: str) -> int:
        """
        Run the forwarder for ``host`` until it is stopped.

        Returns:
            Process exit code
        """
        controller = self.build(host)
        controller.install_signal_handlers()

        logger.info("Starting Docker Machine SSH auto-forwarder...")
        report = await controller.run()

        if report.exit_code == 0:
            logger.info("Forwarder stopped")
        return report.exit_code
