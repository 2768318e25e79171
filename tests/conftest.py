from __future__ import annotations

from collections.abc import Generator

import pytest

from detector_sessions.config.sessions import SessionSettings
from detector_sessions.infrastructure.state.session_registry import InMemorySessionRegistry
from tests.fixtures.fakes import FakeClock, RecordingSweeperFactory


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def settings() -> SessionSettings:
    return SessionSettings(grace_period_ms=5_000, renewal_window_ms=300_000, sweep_interval_ms=60_000)


@pytest.fixture
def sweepers() -> RecordingSweeperFactory:
    return RecordingSweeperFactory()


@pytest.fixture
def registry(
    settings: SessionSettings,
    clock: FakeClock,
    sweepers: RecordingSweeperFactory,
) -> Generator[InMemorySessionRegistry, None, None]:
    registry = InMemorySessionRegistry(settings=settings, clock=clock, sweeper_factory=sweepers)
    yield registry
    registry.close()
