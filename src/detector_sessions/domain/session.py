"""Session entry tracked by the registry."""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime, timedelta

from detector_sessions.application.ports.detector_handle import DetectorHandle

DEFAULT_GRACE_PERIOD = timedelta(milliseconds=5_000)
DEFAULT_RENEWAL_WINDOW = timedelta(milliseconds=300_000)


@dataclass(frozen=True, slots=True)
class UserSession:
    """Snapshot of one client's activity window and detector handle."""

    session_id: str
    created_at: datetime
    expires_at: datetime
    renewal_window: timedelta = DEFAULT_RENEWAL_WINDOW
    handle: DetectorHandle | None = None

    def __post_init__(self) -> None:
        if not self.session_id:
            raise ValueError("session_id must be non-empty")
        if self.renewal_window <= timedelta(0):
            raise ValueError("renewal_window must be positive")
        if self.expires_at < self.created_at:
            raise ValueError("expires_at must not precede created_at")

    @classmethod
    def open(
        cls,
        session_id: str,
        *,
        now: datetime,
        grace_period: timedelta = DEFAULT_GRACE_PERIOD,
        renewal_window: timedelta = DEFAULT_RENEWAL_WINDOW,
    ) -> UserSession:
        """Return a fresh session that expires after the initial grace period."""
        return cls(
            session_id=session_id,
            created_at=now,
            expires_at=now + grace_period,
            renewal_window=renewal_window,
        )

    def is_expired(self, now: datetime) -> bool:
        return now > self.expires_at

    def touched(self, now: datetime) -> UserSession:
        """Return a session whose deadline is a full renewal window past ``now``."""
        # A clock that steps backwards must not shorten the deadline.
        return replace(self, expires_at=max(self.expires_at, now + self.renewal_window))

    def with_handle(self, handle: DetectorHandle) -> UserSession:
        return replace(self, handle=handle)


__all__ = ["DEFAULT_GRACE_PERIOD", "DEFAULT_RENEWAL_WINDOW", "UserSession"]
