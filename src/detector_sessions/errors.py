"""Domain-specific exceptions raised by the session registry."""

from __future__ import annotations


class SessionError(Exception):
    """Base class for session registry failures."""


class SessionNotFoundError(SessionError, LookupError):
    """Raised when an operation requires a session that is not registered."""

    def __init__(self, session_id: str) -> None:
        super().__init__(f"session {session_id} not found")
        self.session_id = session_id


class HandleNotAssignedError(SessionError):
    """Raised when a session has no detector handle to configure."""

    def __init__(self, session_id: str) -> None:
        super().__init__(f"session {session_id} has no detector handle")
        self.session_id = session_id


class DuplicateSessionError(SessionError, ValueError):
    """Raised when a live session already uses the requested identifier."""

    def __init__(self, session_id: str) -> None:
        super().__init__(f"session {session_id} already registered")
        self.session_id = session_id


__all__ = [
    "DuplicateSessionError",
    "HandleNotAssignedError",
    "SessionError",
    "SessionNotFoundError",
]
