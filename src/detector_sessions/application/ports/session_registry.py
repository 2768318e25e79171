"""Port describing session registry access for collaborators."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol

from detector_sessions.application.ports.detector_handle import DetectorHandle
from detector_sessions.domain.session import UserSession


class SessionRegistryPort(Protocol):
    """Registry of live user sessions with sliding expiration."""

    def create(self, session_id: str) -> str:
        """Register a new session and return its identifier."""

    def exists(self, session_id: str) -> bool:
        """Return whether the session is live, renewing it when found."""

    def get(self, session_id: str) -> UserSession | None:
        """Return the session snapshot without renewing it."""

    def touch(self, session: str | UserSession) -> None:
        """Renew the session deadline, if the session is still live."""

    def configure_handle(self, session_id: str, preferences: Mapping[str, Any]) -> int:
        """Forward ``preferences`` to the session's handle and return the filtered count."""

    def assign_handle(self, session_id: str, handle: DetectorHandle) -> None:
        """Attach ``handle`` to the session, if the session is still live."""

    def sweep_expired(self) -> int:
        """Remove expired sessions and return how many were removed."""


__all__ = ["SessionRegistryPort"]
