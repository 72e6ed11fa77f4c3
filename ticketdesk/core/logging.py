"""Logging and tracing utilities for the Ticketdesk dashboard."""

from __future__ import annotations

import atexit
import logging
from logging.config import dictConfig

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor

from ticketdesk.core.config import Settings

TRACER_NAME = "ticketdesk.ui"

_TRACER_PROVIDER: TracerProvider | None = None


def _parse_headers(header_string: str | None) -> dict[str, str]:
    if not header_string:
        return {}
    headers: dict[str, str] = {}
    for item in header_string.split(","):
        key, sep, value = item.partition("=")
        if not sep or not key.strip():
            continue
        headers[key.strip()] = value.strip()
    return headers


def configure_logging(settings: Settings) -> logging.Logger:
    """Configure the dashboard loggers based on settings.

    Streamlit re-executes the script on every interaction, so this is safe to
    call repeatedly: ``dictConfig`` replaces the handlers instead of stacking them.
    """

    level = getattr(logging, settings.log_level.upper(), logging.INFO)
    dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "default": {
                    "format": settings.log_format,
                }
            },
            "handlers": {
                "default": {
                    "class": "logging.StreamHandler",
                    "formatter": "default",
                    "level": level,
                }
            },
            "loggers": {
                "ticketdesk": {"level": level},
                # request lines from the API client are noise at INFO
                "httpx": {"level": "WARNING"},
            },
            "root": {
                "handlers": ["default"],
                "level": level,
            },
        }
    )

    logger = logging.getLogger(settings.app_name)
    logger.setLevel(level)
    return logger


def init_tracer(settings: Settings) -> TracerProvider | None:
    """Initialise the OpenTelemetry tracer once per process if enabled."""

    global _TRACER_PROVIDER

    if not settings.otel_enabled:
        return None
    if _TRACER_PROVIDER is not None:
        return _TRACER_PROVIDER

    resource = Resource(attributes={"service.name": settings.otel_service_name})
    provider = TracerProvider(resource=resource)

    exporter_kwargs: dict[str, object] = {}
    if settings.otel_exporter_otlp_endpoint:
        exporter_kwargs["endpoint"] = settings.otel_exporter_otlp_endpoint
    headers = _parse_headers(settings.otel_exporter_otlp_headers)
    if headers:
        exporter_kwargs["headers"] = headers

    provider.add_span_processor(BatchSpanProcessor(OTLPSpanExporter(**exporter_kwargs)))

    trace.set_tracer_provider(provider)
    _TRACER_PROVIDER = provider
    # Streamlit has no shutdown hook; flush pending spans when the process exits.
    atexit.register(shutdown_tracer)
    return provider


def get_tracer() -> trace.Tracer:
    """Tracer for dashboard spans; a no-op tracer until ``init_tracer`` runs."""

    return trace.get_tracer(TRACER_NAME)


def shutdown_tracer() -> None:
    """Flush and shut down the configured tracer provider."""

    global _TRACER_PROVIDER

    if _TRACER_PROVIDER is None:
        return
    _TRACER_PROVIDER.shutdown()
    _TRACER_PROVIDER = None
