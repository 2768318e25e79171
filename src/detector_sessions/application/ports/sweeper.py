"""Port describing the background expiration sweeper."""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol


class SweeperPort(Protocol):
    """Periodic task driving registry sweeps."""

    def start(self) -> None:
        """Begin periodic sweeping."""

    def stop(self, timeout: float = 5.0) -> None:
        """Stop sweeping and wait for the worker to exit."""

    @property
    def running(self) -> bool:
        """Return True while the sweeper is alive."""


SweepCallback = Callable[[], bool]
"""Runs one sweep; returns False once the sweeper should stop."""

SweeperFactory = Callable[[SweepCallback, float], SweeperPort]
"""Builds a sweeper from a sweep callback and an interval in seconds."""


__all__ = ["SweepCallback", "SweeperFactory", "SweeperPort"]
