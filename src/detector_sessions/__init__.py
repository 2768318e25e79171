"""In-process registry of short-lived detector sessions with sliding expiration."""

from __future__ import annotations

from detector_sessions.application.ports.detector_handle import DetectorHandle
from detector_sessions.application.ports.session_registry import SessionRegistryPort
from detector_sessions.config.sessions import SessionSettings
from detector_sessions.domain.session import UserSession
from detector_sessions.errors import (
    DuplicateSessionError,
    HandleNotAssignedError,
    SessionError,
    SessionNotFoundError,
)
from detector_sessions.infrastructure.state.session_registry import InMemorySessionRegistry
from detector_sessions.runtime.bootstrap import build_registry, build_runtime
from detector_sessions.runtime.expiration_sweeper import ExpirationSweeper

__all__ = [
    "DetectorHandle",
    "DuplicateSessionError",
    "ExpirationSweeper",
    "HandleNotAssignedError",
    "InMemorySessionRegistry",
    "SessionError",
    "SessionNotFoundError",
    "SessionRegistryPort",
    "SessionSettings",
    "UserSession",
    "build_registry",
    "build_runtime",
]
