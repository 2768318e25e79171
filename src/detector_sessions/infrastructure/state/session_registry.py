"""In-memory session registry with sliding expiration."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from datetime import UTC, datetime
from threading import RLock
from typing import Any

from detector_sessions.application.ports.detector_handle import DetectorHandle
from detector_sessions.application.ports.session_registry import SessionRegistryPort
from detector_sessions.application.ports.sweeper import SweeperFactory, SweeperPort
from detector_sessions.config.sessions import SessionSettings
from detector_sessions.domain.session import UserSession
from detector_sessions.errors import (
    DuplicateSessionError,
    HandleNotAssignedError,
    SessionNotFoundError,
)
from detector_sessions.observability.tracing import SWEEP_SPAN_NAME, sweep_tracer
from detector_sessions.runtime.expiration_sweeper import create_expiration_sweeper

logger = logging.getLogger("detector_sessions.registry")
sweep_logger = logging.getLogger("detector_sessions.sweeper")


def _utc_now() -> datetime:
    return datetime.now(UTC)


class InMemorySessionRegistry(SessionRegistryPort):
    """Stores live sessions in memory and reclaims them once idle.

    Every read and write goes through one re-entrant lock. The same lock
    guards the sweeper bookkeeping, so the 0 -> 1 transition that launches a
    sweeper and the tick that retires it can never interleave.
    """

    def __init__(
        self,
        *,
        settings: SessionSettings | None = None,
        clock: Callable[[], datetime] | None = None,
        sweeper_factory: SweeperFactory | None = None,
    ) -> None:
        self._settings = settings or SessionSettings()
        self._clock = clock or _utc_now
        self._sweeper_factory = sweeper_factory or create_expiration_sweeper
        self._sessions: dict[str, UserSession] = {}
        self._lock = RLock()
        self._sweeper: SweeperPort | None = None
        self._sweeper_active = False
        self._sweeper_generation = 0

    @property
    def settings(self) -> SessionSettings:
        return self._settings

    @property
    def sweeper_active(self) -> bool:
        """Return True while a sweeper is scheduled for this registry."""
        with self._lock:
            return self._sweeper_active

    def create(self, session_id: str) -> str:
        with self._lock:
            if session_id in self._sessions:
                raise DuplicateSessionError(session_id)
            self._sessions[session_id] = UserSession.open(
                session_id,
                now=self._clock(),
                grace_period=self._settings.grace_period,
                renewal_window=self._settings.renewal_window,
            )
            if not self._sweeper_active:
                try:
                    self._start_sweeper()
                except BaseException:
                    del self._sessions[session_id]
                    raise
            logger.debug("session created", extra={"data": {"session_id": session_id}})
        return session_id

    def exists(self, session_id: str) -> bool:
        with self._lock:
            if session_id not in self._sessions:
                return False
            self._renew(session_id)
            return True

    def get(self, session_id: str) -> UserSession | None:
        with self._lock:
            return self._sessions.get(session_id)

    def touch(self, session: str | UserSession) -> None:
        session_id = session.session_id if isinstance(session, UserSession) else session
        with self._lock:
            if session_id in self._sessions:
                self._renew(session_id)

    def configure_handle(self, session_id: str, preferences: Mapping[str, Any]) -> int:
        with self._lock:
            session = self._sessions.get(session_id)
            if session is None:
                raise SessionNotFoundError(session_id)
            if session.handle is None:
                raise HandleNotAssignedError(session_id)
            filtered = session.handle.setup(preferences)
        return 0 if filtered is None else filtered

    def assign_handle(self, session_id: str, handle: DetectorHandle) -> None:
        with self._lock:
            session = self._sessions.get(session_id)
            if session is None:
                return
            self._sessions[session_id] = session.with_handle(handle).touched(self._clock())

    def sweep_expired(self) -> int:
        with self._lock:
            return self._sweep_locked()

    def session_ids(self) -> tuple[str, ...]:
        """Return a snapshot of live session identifiers in creation order."""
        with self._lock:
            return tuple(self._sessions)

    def count(self) -> int:
        with self._lock:
            return len(self._sessions)

    def __len__(self) -> int:
        return self.count()

    def close(self) -> None:
        """Stop the active sweeper; sessions are kept."""
        with self._lock:
            sweeper = self._sweeper
            self._sweeper = None
            self._sweeper_active = False
            self._sweeper_generation += 1
        if sweeper is not None:
            sweeper.stop()

    def _renew(self, session_id: str) -> None:
        self._sessions[session_id] = self._sessions[session_id].touched(self._clock())

    def _sweep_locked(self) -> int:
        now = self._clock()
        with sweep_tracer().start_as_current_span(SWEEP_SPAN_NAME) as span:
            before = len(self._sessions)
            self._sessions = {
                session_id: session
                for session_id, session in self._sessions.items()
                if not session.is_expired(now)
            }
            removed = before - len(self._sessions)
            span.set_attributes(
                {
                    "sessions.removed": removed,
                    "sessions.remaining": len(self._sessions),
                }
            )
        if removed:
            sweep_logger.info(
                "%d sessions deleted",
                removed,
                extra={"data": {"removed": removed, "remaining": len(self._sessions)}},
            )
        return removed

    def _start_sweeper(self) -> None:
        self._sweeper_generation += 1
        generation = self._sweeper_generation

        def sweep() -> bool:
            return self._scheduled_sweep(generation)

        # Published only after start succeeds; the generation is spent either way.
        sweeper = self._sweeper_factory(sweep, self._settings.sweep_interval_seconds)
        sweeper.start()
        self._sweeper = sweeper
        self._sweeper_active = True
        sweep_logger.debug(
            "sweeper started",
            extra={
                "data": {
                    "generation": generation,
                    "interval_s": self._settings.sweep_interval_seconds,
                }
            },
        )

    def _scheduled_sweep(self, generation: int) -> bool:
        with self._lock:
            if generation != self._sweeper_generation or not self._sweeper_active:
                sweep_logger.debug(
                    "superseded sweeper retired", extra={"data": {"generation": generation}}
                )
                return False
            self._sweep_locked()
            if self._sessions:
                return True
            self._sweeper = None
            self._sweeper_active = False
            sweep_logger.info("no more sessions, sweeper stopped")
            return False


__all__ = ["InMemorySessionRegistry"]
