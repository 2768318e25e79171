"""Base worker abstraction with shared threading lifecycle."""

from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod
from typing import ClassVar


class BaseWorker(ABC):
    """Abstract background worker with start/stop lifecycle.

    Subclasses implement ``_tick()``, which runs once per ``poll_interval``
    seconds until ``stop()`` is invoked or the worker stops itself via
    ``_request_stop()``. The first tick happens one full interval after
    ``start()``.
    """

    worker_name: ClassVar[str] = "base-worker"
    logger_name: ClassVar[str] = "detector_sessions.worker"
    default_poll_interval: ClassVar[float] = 1.0

    def __init__(self, *, poll_interval: float | None = None) -> None:
        self._poll_interval = poll_interval
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None
        self._logger = logging.getLogger(self.logger_name)

    def start(self) -> None:
        """Start the background worker thread (idempotent)."""

        if self._thread and self._thread.is_alive():
            return

        self._stop.clear()
        self._thread = threading.Thread(target=self._run_loop, name=self.worker_name, daemon=True)
        self._thread.start()

    def stop(self, timeout: float = 5.0) -> None:
        """Signal the worker to stop and wait for termination."""

        if not self._thread:
            return

        self._stop.set()
        if self._thread is not threading.current_thread():
            self._thread.join(timeout=timeout)

    @property
    def running(self) -> bool:
        """Return True if the worker thread is alive."""

        return bool(self._thread and self._thread.is_alive())

    @property
    def poll_interval(self) -> float:
        """Return the poll interval (instance override or class default)."""

        return self._poll_interval if self._poll_interval is not None else self.default_poll_interval

    def _request_stop(self) -> None:
        """End the loop after the current tick, callable from within ``_tick``."""

        self._stop.set()

    def _run_loop(self) -> None:
        """Main loop that calls tick() every interval until stopped."""

        while not self._stop.wait(self.poll_interval):
            try:
                self._tick()
            except Exception:
                self._logger.exception("worker tick failed")
                self._on_error()

    @abstractmethod
    def _tick(self) -> None:
        """Execute one iteration of the worker's task."""

    def _on_error(self) -> None:  # noqa: B027
        """Hook called when tick() raises an exception."""


__all__ = ["BaseWorker"]
