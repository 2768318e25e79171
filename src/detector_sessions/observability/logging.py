"""Logging helpers (formatter + dictConfig builder) for the session service."""

from __future__ import annotations

import json
import logging
import os
import time
import traceback
import types
from collections.abc import Mapping
from dataclasses import asdict, is_dataclass
from datetime import datetime, timedelta
from logging.config import dictConfig
from typing import Any

from opentelemetry import baggage, trace

_PACKAGE_LOGGER = "detector_sessions"


def _level(env_var: str, default: str) -> str:
    return os.getenv(env_var, default).upper()


def _should_emit_json_payload() -> bool:
    # Cloud Run and Kubernetes ingestion parse JSON lines into structured payloads.
    return bool(os.getenv("K_SERVICE") or os.getenv("KUBERNETES_SERVICE_HOST"))


def _structured_payload(record: logging.LogRecord) -> dict[str, Any]:
    record_dict = record.__dict__
    payload: dict[str, Any] = {
        "message": record.getMessage(),
        "severity": record.levelname,
        "logger": record.name,
        "timestamp": (
            f"{time.strftime('%Y-%m-%dT%H:%M:%S', time.gmtime(record.created))}"
            f".{int(record.msecs):03d}Z"
        ),
    }
    if record.exc_info:
        payload["exception"] = "".join(traceback.format_exception(*record.exc_info)).rstrip("\n")
    if record_dict.get("data"):
        payload["data"] = _sanitize_for_json(record_dict["data"])

    json_fields = record_dict.get("json_fields")
    if json_fields:
        sanitized = _sanitize_for_json(json_fields)
        if isinstance(sanitized, Mapping):
            for key, value in sanitized.items():
                if key in payload:
                    payload.setdefault("json_fields", {})[key] = value
                else:
                    payload[key] = value
        else:
            payload["json_fields"] = sanitized
    return payload


class ExtrasFormatter(logging.Formatter):
    """Append structured `data` payloads when present."""

    def format(self, record: logging.LogRecord) -> str:
        if _should_emit_json_payload():
            return json.dumps(_structured_payload(record), sort_keys=True, separators=(",", ":"))

        formatted = super().format(record)
        record_data = record.__dict__.get("data")
        if record_data:
            try:
                encoded = json.dumps(record_data, sort_keys=True, separators=(",", ":"))
            except TypeError:
                encoded = json.dumps(_sanitize_for_json(record_data), sort_keys=True, separators=(",", ":"))
            return f"{formatted} | data={encoded}"
        return formatted


class CloudJsonSanitizer(logging.Filter):
    """Make json_fields/data JSON-serializable before Cloud Logging ships them."""

    def filter(self, record: logging.LogRecord) -> bool:
        record_dict = record.__dict__
        sanitized_data: Any | None = None
        if "data" in record_dict:
            sanitized_data = _sanitize_for_json(record_dict["data"])
            record_dict["data"] = sanitized_data
        json_fields = _sanitize_for_json(record_dict.get("json_fields") or {})
        if not isinstance(json_fields, Mapping):
            json_fields = {"json_fields": json_fields}
        if sanitized_data is not None and "data" not in json_fields:
            json_fields["data"] = sanitized_data
        if json_fields:
            record_dict["json_fields"] = json_fields
        return True


class OtelContextLogFilter(logging.Filter):
    """Inject OpenTelemetry trace context + baggage into json_fields."""

    def filter(self, record: logging.LogRecord) -> bool:
        record_dict = record.__dict__
        existing = record_dict.get("json_fields")
        json_fields: dict[str, Any] = dict(existing) if isinstance(existing, Mapping) else {}

        otel: dict[str, Any] = {}
        span_context = trace.get_current_span().get_span_context()
        if span_context.is_valid:
            otel["trace_id"] = f"{span_context.trace_id:032x}"
            otel["span_id"] = f"{span_context.span_id:016x}"

        baggage_values = baggage.get_all()
        if baggage_values:
            otel["baggage"] = {key: str(value) for key, value in baggage_values.items()}

        if otel:
            json_fields["otel"] = otel
            record_dict["json_fields"] = json_fields
        return True


def build_log_config(
    *,
    root_level_env: str = "LOG_LEVEL",
    root_default: str = "INFO",
    extra_loggers: Mapping[str, dict[str, Any]] | None = None,
    cloud_logging_enabled: bool = False,
    gcp_project: str | None = None,
    cloud_log_name: str = "detector-sessions",
) -> dict[str, Any]:
    """Return a dictConfig-compatible logging configuration."""

    cloud_handler: dict[str, Any] | None = None
    if cloud_logging_enabled:
        if not gcp_project:
            raise RuntimeError("GCP project required when cloud logging is enabled")
        cloud_handler = _cloud_logging_handler(gcp_project, cloud_log_name)

    handler_names = ["console"] if cloud_handler is None else ["console", "cloud_logging"]
    handlers: dict[str, Any] = {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "console",
            "stream": "ext://sys.stdout",
            "filters": ["otel_context"],
        }
    }
    if cloud_handler is not None:
        handlers["cloud_logging"] = cloud_handler | {"filters": ["otel_context", "cloud_json_sanitizer"]}

    loggers: dict[str, dict[str, Any]] = {
        f"{_PACKAGE_LOGGER}.sweeper": {
            "level": _level("SWEEPER_LOG_LEVEL", "INFO"),
            "handlers": list(handler_names),
            "propagate": False,
        },
    }
    if extra_loggers:
        loggers.update(extra_loggers)

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "console": {
                "()": ExtrasFormatter,
                "format": "%(asctime)s %(levelname)s %(name)s: %(message)s",
                "datefmt": "%Y-%m-%dT%H:%M:%S",
            }
        },
        "filters": {
            "otel_context": {"()": OtelContextLogFilter},
            "cloud_json_sanitizer": {"()": CloudJsonSanitizer},
        },
        "handlers": handlers,
        "root": {
            "level": _level(root_level_env, root_default),
            "handlers": list(handler_names),
        },
        "loggers": loggers,
    }


def _cloud_logging_handler(project: str, log_name: str) -> dict[str, Any]:
    from google.cloud import logging as gcp_logging
    from google.cloud.logging_v2.resource import Resource

    client = gcp_logging.Client(project=project)  # type: ignore[no-untyped-call]
    return {
        "level": "INFO",
        "class": "google.cloud.logging_v2.handlers.handlers.CloudLoggingHandler",
        "client": client,
        "name": log_name,
        "resource": Resource("global", {"project_id": project}),
        "formatter": "console",
    }


def _sanitize_for_json(value: Any, depth: int = 10, max_items: int = 200) -> Any:
    """Return a JSON-serializable copy; fallback to string for unknowns."""

    if depth <= 0:
        return "<depth_exceeded>"

    if value is None or isinstance(value, (str, int, float, bool)):
        return value

    if isinstance(value, datetime):
        return value.isoformat()

    if isinstance(value, timedelta):
        return value.total_seconds()

    if isinstance(value, (bytes, bytearray)):
        return f"<bytes len={len(value)}>"

    if isinstance(value, (types.BuiltinFunctionType, types.FunctionType, types.MethodType)):
        return f"<callable {value.__name__}>"

    if is_dataclass(value) and not isinstance(value, type):
        return _sanitize_for_json(asdict(value), depth - 1, max_items)

    if isinstance(value, Mapping):
        result: dict[str, Any] = {}
        for idx, (k, v) in enumerate(value.items()):
            if idx >= max_items:
                result["<truncated>"] = f"...{len(value) - idx} more"
                break
            result[str(k)] = _sanitize_for_json(v, depth - 1, max_items)
        return result

    if isinstance(value, (list, tuple, set)):
        items = list(value)
        out = [_sanitize_for_json(item, depth - 1, max_items) for item in items[:max_items]]
        if len(items) > max_items:
            out.append(f"... {len(items) - max_items} more")
        return out

    return str(value)


def configure_logging(
    *,
    cloud_logging_enabled: bool = False,
    gcp_project: str | None = None,
    cloud_log_name: str = "detector-sessions",
    extra_loggers: Mapping[str, dict[str, Any]] | None = None,
) -> None:
    """Apply the logging config."""
    dictConfig(
        build_log_config(
            extra_loggers=extra_loggers,
            cloud_logging_enabled=cloud_logging_enabled,
            gcp_project=gcp_project,
            cloud_log_name=cloud_log_name,
        )
    )
    logging.getLogger(_PACKAGE_LOGGER).debug(
        "configured logging",
        extra={"data": {"cloud_logging_enabled": cloud_logging_enabled}},
    )


def init_logging() -> None:
    """Console-only logging for processes that never ship to Cloud Logging."""

    configure_logging(cloud_logging_enabled=False)


__all__ = [
    "CloudJsonSanitizer",
    "ExtrasFormatter",
    "OtelContextLogFilter",
    "build_log_config",
    "configure_logging",
    "init_logging",
]
