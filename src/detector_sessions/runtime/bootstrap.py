"""Runtime wiring for a process-wide session registry."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from detector_sessions.config.observability import ObservabilitySettings
from detector_sessions.config.sessions import SessionSettings
from detector_sessions.infrastructure.state.session_registry import InMemorySessionRegistry
from detector_sessions.observability.logging import configure_logging, init_logging
from detector_sessions.observability.tracing import configure_tracing

logger = logging.getLogger("detector_sessions.runtime")


@dataclass(frozen=True, slots=True)
class RuntimeContext:
    """Components a transport layer needs to serve sessions."""

    settings: SessionSettings
    observability: ObservabilitySettings
    registry: InMemorySessionRegistry

    def shutdown(self) -> None:
        self.registry.close()


def build_registry(settings: SessionSettings | None = None) -> InMemorySessionRegistry:
    """Construct a registry from explicit or environment-derived settings."""
    resolved = settings or SessionSettings.load()
    return InMemorySessionRegistry(settings=resolved)


def build_runtime(
    settings: SessionSettings | None = None,
    observability: ObservabilitySettings | None = None,
) -> RuntimeContext:
    """Configure logging/tracing and return the runtime context."""
    resolved_observability = observability or ObservabilitySettings()
    if resolved_observability.enable_cloud_logging:
        configure_logging(
            cloud_logging_enabled=True,
            gcp_project=resolved_observability.gcp_project,
            cloud_log_name=resolved_observability.cloud_log_name,
        )
    else:
        init_logging()
    configure_tracing(service_name=resolved_observability.service_name)
    registry = build_registry(settings)
    logger.info(
        "session runtime ready",
        extra={
            "data": {
                "grace_period_ms": registry.settings.grace_period_ms,
                "renewal_window_ms": registry.settings.renewal_window_ms,
                "sweep_interval_ms": registry.settings.sweep_interval_ms,
            }
        },
    )
    return RuntimeContext(
        settings=registry.settings,
        observability=resolved_observability,
        registry=registry,
    )


__all__ = ["RuntimeContext", "build_registry", "build_runtime"]
