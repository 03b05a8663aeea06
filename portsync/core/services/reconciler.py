"""
Reconciliation loop keeping the tunnel in step with published container ports.

The loop is strictly sequential: a cycle, including any tunnel replacement,
finishes before the next one starts. It runs until the stop event is set or
a collaborator fails; failures are never retried.
"""

import asyncio
from enum import Enum
from typing import Any, Dict, Optional

from loguru import logger

from ..domain.ports import ForwardedPortSet, has_changed
from ..interfaces.forwarding import IContainerObserver, ITunnelSupervisor
from ..interfaces.lifecycle import IHealthCheckable
from .extractor import PortSetExtractor

DEFAULT_POLL_INTERVAL = 0.1


class ReconcilerState(Enum):
    """Reconciler states."""
    IDLE = "idle"
    POLLING = "polling"
    CHANGE_DETECTED = "change_detected"
    NO_CHANGE = "no_change"
    STOPPED = "stopped"


class Reconciler(IHealthCheckable):
    """
    Control loop that polls containers and replaces the tunnel on change.

    The reconciler never touches the forwarding process itself; it only
    asks the supervisor to replace or terminate the tunnel.
    """

    def __init__(
        self,
        observer: IContainerObserver,
        extractor: PortSetExtractor,
        supervisor: ITunnelSupervisor,
        poll_interval: float = DEFAULT_POLL_INTERVAL
    ) -> None:
        if poll_interval < 0:
            raise ValueError(
                f"Poll interval must not be negative, got {poll_interval}")

        self._observer = observer
        self._extractor = extractor
        self._supervisor = supervisor
        self._poll_interval = poll_interval

        self._state = ReconcilerState.IDLE
        self._current = ForwardedPortSet.empty()
        self._cycles = 0
        self._changes = 0
        self._last_error: Optional[BaseException] = None

    @property
    def state(self) -> ReconcilerState:
        return self._state

    @property
    def current_ports(self) -> ForwardedPortSet:
        """Ports applied by the last successful tunnel replacement."""
        return self._current

    @property
    def last_error(self) -> Optional[BaseException]:
        return self._last_error

    @property
    def cycles(self) -> int:
        return self._cycles

    async def run(self, stop: asyncio.Event) -> None:
        """
        Run the reconciliation loop until ``stop`` is set.

        A baseline tunnel forwarding no container ports is established
        before the first poll.

        Args:
            stop: Event set by the owner to end the loop at the next
                cycle boundary

        Raises:
            PortsyncError: If any collaborator fails; the loop is stopped
        """
        if self._state is not ReconcilerState.IDLE:
            raise RuntimeError(
                f"Reconciler cannot run from state {self._state.value}")

        logger.info("Starting reconciliation loop")

        try:
            self._current = ForwardedPortSet.empty()
            await self._supervisor.replace(self._current)

            while not stop.is_set():
                await self.run_cycle()
                if await self._wait_for_stop(stop):
                    break

        except asyncio.CancelledError:
            self._state = ReconcilerState.STOPPED
            logger.debug("Reconciliation loop cancelled")
            raise
        except Exception as e:
            self._state = ReconcilerState.STOPPED
            self._last_error = e
            logger.error(f"Reconciliation stopped after {type(e).__name__}: {e}")
            raise

        self._state = ReconcilerState.STOPPED
        logger.info(
            f"Reconciliation loop stopped after {self._cycles} cycle(s)")

    async def run_cycle(self) -> bool:
        """
        Run one poll cycle.

        Returns:
            True if the tunnel was replaced, False if nothing changed
        """
        self._state = ReconcilerState.POLLING
        self._cycles += 1

        ids = await self._observer.list_container_ids()
        payload = await self._observer.inspect_all(ids)
        candidate = self._extractor.extract(payload)

        if not has_changed(self._current, candidate):
            self._state = ReconcilerState.NO_CHANGE
            return False

        self._state = ReconcilerState.CHANGE_DETECTED
        logger.info("Change detected, reloading...")
        logger.info(f"Forwarded ports: {self._current} -> {candidate}")

        await self._supervisor.replace(candidate)

        self._current = candidate
        self._changes += 1
        return True

    async def _wait_for_stop(self, stop: asyncio.Event) -> bool:
        """Sleep for the poll interval; return True if stop was requested."""
        try:
            await asyncio.wait_for(stop.wait(), timeout=self._poll_interval)
        except asyncio.TimeoutError:
            return False
        return True

    async def check_health(self) -> Dict[str, Any]:
        """Check reconciler health."""
        return {
            'healthy': self._last_error is None,
            'status': self._state.value,
            'details': {
                'cycles': self._cycles,
                'changes': self._changes,
                'forwarded_ports': list(self._current),
                'poll_interval': self._poll_interval,
                'last_error': str(self._last_error) if self._last_error else None
            }
        }
