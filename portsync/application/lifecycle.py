"""
Lifecycle control for the forwarder.

The controller is the only holder of the stop trigger. Operator signals
and reconciler faults both end in the same orderly shutdown: stop the
loop, terminate the tunnel, report how it went.
"""

import asyncio
import signal
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Optional

from loguru import logger

from ..core.exceptions import PortsyncError
from ..core.interfaces.forwarding import ITunnelSupervisor
from ..core.services.reconciler import Reconciler

DEFAULT_SHUTDOWN_TIMEOUT = 5.0


class ShutdownReason(Enum):
    """Why the forwarder shut down."""
    INTERRUPT = "interrupt"
    FAULT = "fault"


@dataclass
class ShutdownReport:
    """Outcome of a shutdown."""
    reason: ShutdownReason
    error: Optional[BaseException] = None
    cleanup_error: Optional[BaseException] = None

    @property
    def exit_code(self) -> int:
        if self.reason is ShutdownReason.FAULT or self.cleanup_error is not None:
            return 1
        return 0


class LifecycleController:
    """
    Runs the reconciler in the background and shuts everything down.

    Args:
        reconciler: Reconciliation loop to run
        supervisor: Supervisor owning the tunnel, terminated on shutdown
        shutdown_timeout: Seconds to wait for the loop to stop by itself
            before its task is cancelled
    """

    def __init__(
        self,
        reconciler: Reconciler,
        supervisor: ITunnelSupervisor,
        shutdown_timeout: float = DEFAULT_SHUTDOWN_TIMEOUT
    ) -> None:
        self._reconciler = reconciler
        self._supervisor = supervisor
        self._shutdown_timeout = shutdown_timeout
        self._stop = asyncio.Event()

    @property
    def stop_requested(self) -> bool:
        return self._stop.is_set()

    def request_stop(self) -> None:
        """Ask the reconciliation loop to stop at its next cycle boundary."""
        self._stop.set()

    def install_signal_handlers(
        self,
        signals: Iterable[signal.Signals] = (signal.SIGINT, signal.SIGTERM)
    ) -> None:
        """Map the given signals to a stop request on the running loop."""
        loop = asyncio.get_running_loop()
        for sig in signals:
            try:
                loop.add_signal_handler(sig, self._on_signal, sig)
            except NotImplementedError:
                # Windows event loops have no add_signal_handler
                signal.signal(
                    sig, lambda signum, frame: loop.call_soon_threadsafe(self._on_signal, signum))

    def _on_signal(self, signum: Any) -> None:
        logger.info(f"Received {signal.Signals(signum).name}, cleaning up...")
        self.request_stop()

    async def run(self) -> ShutdownReport:
        """
        Run until a stop request or a reconciler fault, then clean up.

        Returns:
            Report describing why the forwarder stopped
        """
        task = asyncio.create_task(
            self._reconciler.run(self._stop), name="reconciler")
        stop_waiter = asyncio.create_task(self._stop.wait())

        try:
            await asyncio.wait({task, stop_waiter}, return_when=asyncio.FIRST_COMPLETED)
        except asyncio.CancelledError:
            task.cancel()
            await self._cleanup()
            raise
        finally:
            stop_waiter.cancel()

        interrupted = self._stop.is_set()
        error = await self._stop_reconciler(task)
        if error is not None and interrupted:
            logger.warning(f"Reconciler ended with an error after stop was requested: {error}")
            report = ShutdownReport(ShutdownReason.INTERRUPT, error=error)
        elif error is not None:
            logger.error(f"Shutting down after fault: {error}")
            report = ShutdownReport(ShutdownReason.FAULT, error=error)
        else:
            report = ShutdownReport(ShutdownReason.INTERRUPT)

        report.cleanup_error = await self._cleanup()

        health = await self._reconciler.check_health()
        logger.debug(f"Final reconciler state: {health}")
        tunnel_health = await self._supervisor.check_health()
        logger.debug(f"Final tunnel state: {tunnel_health}")

        return report

    async def _stop_reconciler(self, task: "asyncio.Task[None]") -> Optional[BaseException]:
        """Stop the reconciler task and return the error it ended with."""
        self._stop.set()

        done, _ = await asyncio.wait({task}, timeout=self._shutdown_timeout)
        if not done:
            logger.warning(
                f"Reconciler did not stop within {self._shutdown_timeout}s, cancelling")
            task.cancel()
            await asyncio.wait({task})

        if task.cancelled():
            return None
        return task.exception()

    async def _cleanup(self) -> Optional[BaseException]:
        """Terminate the tunnel; return the error if that failed."""
        try:
            await self._supervisor.terminate()
        except PortsyncError as e:
            logger.error(f"Error attempting cleanup: {e}")
            return e

        logger.info("Cleanup successful.")
        return None
