"""
Shared fixtures for the reconciliation tests.
"""

import asyncio

import pytest

from portsync.core.exceptions import TerminationError, TunnelStartError
from tests.fakes import FakeProcessProvider, FakeSupervisor


@pytest.fixture
def stop_event() -> asyncio.Event:
    """Stop event shared by a reconciler and its fake observer."""
    return asyncio.Event()


@pytest.fixture
def fake_supervisor() -> FakeSupervisor:
    return FakeSupervisor()


@pytest.fixture
def fake_provider() -> FakeProcessProvider:
    return FakeProcessProvider()


@pytest.fixture
def start_error() -> TunnelStartError:
    return TunnelStartError("ssh could not be started")


@pytest.fixture
def termination_error() -> TerminationError:
    return TerminationError("ssh could not be killed")
