"""Session lifetime and sweep configuration."""

from __future__ import annotations

import logging
from datetime import timedelta

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class SessionSettings(BaseSettings):
    """Grace period, renewal window and sweep cadence for user sessions."""

    model_config = SettingsConfigDict(
        env_prefix="",
        extra="ignore",
        case_sensitive=False,
        frozen=True,
        populate_by_name=True,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    grace_period_ms: int = Field(
        default=5_000,
        gt=0,
        alias="SESSION_GRACE_PERIOD_MS",
        description="Lifetime of a session that has never been touched.",
    )
    renewal_window_ms: int = Field(
        default=300_000,
        gt=0,
        alias="SESSION_RENEWAL_WINDOW_MS",
        description="Time added to now whenever a session is touched.",
    )
    sweep_interval_ms: int = Field(
        default=60_000,
        gt=0,
        alias="SESSION_SWEEP_INTERVAL_MS",
        description="Period between background sweeps of expired sessions.",
    )

    @property
    def grace_period(self) -> timedelta:
        return timedelta(milliseconds=self.grace_period_ms)

    @property
    def renewal_window(self) -> timedelta:
        return timedelta(milliseconds=self.renewal_window_ms)

    @property
    def sweep_interval_seconds(self) -> float:
        return self.sweep_interval_ms / 1000

    @classmethod
    def load(cls) -> SessionSettings:
        instance = cls()
        logger = logging.getLogger("detector_sessions.settings")
        logger.info("session settings loaded: %r", instance)
        return instance


__all__ = ["SessionSettings"]
