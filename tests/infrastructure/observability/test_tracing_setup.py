from __future__ import annotations

import pytest
from opentelemetry import trace

from detector_sessions.observability import tracing


@pytest.fixture(autouse=True)
def reset_tracing(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(tracing, "_TRACING_CONFIGURED", False)
    for name in ("OTEL_TRACES_EXPORTER", "OTEL_EXPORTER_OTLP_ENDPOINT", "OTEL_EXPORTER_OTLP_TRACES_ENDPOINT"):
        monkeypatch.delenv(name, raising=False)


def test_tracing_is_noop_without_endpoint() -> None:
    assert tracing.configure_tracing(service_name="detector-sessions") is False
    assert tracing.configure_tracing(service_name="detector-sessions") is False


def test_tracing_disabled_explicitly(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("OTEL_TRACES_EXPORTER", "none")
    monkeypatch.setenv("OTEL_EXPORTER_OTLP_ENDPOINT", "http://collector:4318")

    assert tracing.configure_tracing(service_name="detector-sessions") is False


def test_tracing_requires_endpoint_when_exporter_selected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("OTEL_TRACES_EXPORTER", "otlp")

    with pytest.raises(RuntimeError, match="OTLP endpoint missing"):
        tracing.configure_tracing(service_name="detector-sessions")


def test_tracing_rejects_blank_service_name(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("OTEL_EXPORTER_OTLP_ENDPOINT", "http://collector:4318")

    with pytest.raises(RuntimeError, match="service_name"):
        tracing.configure_tracing(service_name="  ")


def test_tracing_installs_provider_named_after_service(monkeypatch: pytest.MonkeyPatch) -> None:
    installed: list[object] = []
    monkeypatch.setenv("OTEL_EXPORTER_OTLP_ENDPOINT", "http://collector:4318")
    monkeypatch.setattr(tracing.trace, "set_tracer_provider", installed.append)

    assert tracing.configure_tracing(service_name="sessions-eu") is True
    assert tracing.configure_tracing(service_name="sessions-eu") is False

    assert len(installed) == 1
    provider = installed[0]
    assert isinstance(provider, tracing.TracerProvider)
    assert provider.resource.attributes["service.name"] == "sessions-eu"
    provider.shutdown()


def test_sweep_tracer_opens_sweep_span() -> None:
    tracer = tracing.sweep_tracer()

    assert isinstance(tracer, trace.Tracer)
    with tracer.start_as_current_span(tracing.SWEEP_SPAN_NAME) as span:
        span.set_attribute("sessions.removed", 0)
