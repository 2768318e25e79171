"""Logging and tracing configuration for the session service."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ObservabilitySettings(BaseSettings):
    """Where session logs and sweep spans are shipped."""

    model_config = SettingsConfigDict(
        env_prefix="",
        extra="ignore",
        case_sensitive=False,
        frozen=True,
        populate_by_name=True,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    enable_cloud_logging: bool = Field(default=False, alias="ENABLE_CLOUD_LOGGING")
    gcp_project: str | None = Field(default=None, alias="GCP_PROJECT")
    cloud_log_name: str = Field(
        default="detector-sessions",
        alias="SESSION_CLOUD_LOG_NAME",
        description="Cloud Logging log name for registry and sweeper records.",
    )
    service_name: str = Field(
        default="detector-sessions",
        min_length=1,
        alias="OTEL_SERVICE_NAME",
        description="service.name resource attribute on sweep spans.",
    )


__all__ = ["ObservabilitySettings"]
