"""OpenTelemetry bootstrap and the tracer used for registry sweeps."""

from __future__ import annotations

import os

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor

SWEEP_TRACER_NAME = "detector_sessions.sweeper"
SWEEP_SPAN_NAME = "sessions.sweep"

_TRACING_CONFIGURED = False


def sweep_tracer() -> trace.Tracer:
    """Return the tracer sweeps record their spans on.

    Resolved on each call so a provider installed after the registry was
    built still receives sweep spans.
    """
    return trace.get_tracer(SWEEP_TRACER_NAME)


def configure_tracing(*, service_name: str) -> bool:
    """Install an OTLP tracer provider for sweep spans when an endpoint is configured.

    Returns True when a provider was installed. Without an OTLP endpoint the
    call is a no-op and sweep spans stay non-recording.
    """

    global _TRACING_CONFIGURED
    if _TRACING_CONFIGURED:
        return False

    traces_exporter = (os.getenv("OTEL_TRACES_EXPORTER") or "").strip().lower()
    otlp_endpoint = (
        os.getenv("OTEL_EXPORTER_OTLP_TRACES_ENDPOINT") or os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT")
    )
    if traces_exporter == "none":
        _TRACING_CONFIGURED = True
        return False
    if not otlp_endpoint:
        if traces_exporter:
            raise RuntimeError(
                "Tracing enabled but OTLP endpoint missing: set OTEL_EXPORTER_OTLP_ENDPOINT "
                "(or OTEL_EXPORTER_OTLP_TRACES_ENDPOINT), or set OTEL_TRACES_EXPORTER=none."
            )
        _TRACING_CONFIGURED = True
        return False

    if not service_name.strip():
        raise RuntimeError("service_name must be a non-empty string")

    provider = TracerProvider(resource=Resource.create({"service.name": service_name.strip()}))
    provider.add_span_processor(BatchSpanProcessor(OTLPSpanExporter()))
    trace.set_tracer_provider(provider)

    _TRACING_CONFIGURED = True
    return True


__all__ = ["SWEEP_SPAN_NAME", "SWEEP_TRACER_NAME", "configure_tracing", "sweep_tracer"]
