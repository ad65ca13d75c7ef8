"""Tracing setup.

One ``TracerProvider`` per process. Exporters are attached from settings when
tracing is enabled; tests attach an in-memory exporter instead. Modules take
their tracer from ``get_tracer`` at import time, which hands out a proxy until
a provider is installed.
"""

from __future__ import annotations

from typing import Any

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import (
    BatchSpanProcessor,
    ConsoleSpanExporter,
    SimpleSpanProcessor,
)
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter

from app.core.config import Settings, get_settings


SERVICE_NAME = "lifecycle-api"

_provider: TracerProvider | None = None
_exporters_attached = False


def tracer_provider(service_name: str = SERVICE_NAME) -> TracerProvider:
    global _provider

    if _provider is None:
        resource = Resource.create(
            {
                "service.name": service_name,
                "service.version": get_settings().app_version,
            }
        )
        _provider = TracerProvider(resource=resource)
        trace.set_tracer_provider(_provider)
    return _provider


def setup_otel(settings: Settings) -> TracerProvider | None:
    global _exporters_attached

    if not settings.otel_enabled:
        return None

    provider = tracer_provider()
    if _exporters_attached:
        return provider

    if settings.otel_exporter_otlp_endpoint:
        exporter = OTLPSpanExporter(endpoint=settings.otel_exporter_otlp_endpoint)
        provider.add_span_processor(BatchSpanProcessor(exporter))
    if settings.otel_console_exporter:
        provider.add_span_processor(SimpleSpanProcessor(ConsoleSpanExporter()))

    _exporters_attached = True
    return provider


def setup_inmemory_otel(service_name: str = SERVICE_NAME) -> InMemorySpanExporter:
    exporter = InMemorySpanExporter()
    tracer_provider(service_name).add_span_processor(SimpleSpanProcessor(exporter))
    return exporter


def get_tracer(name: str) -> trace.Tracer:
    return trace.get_tracer(name)


def correlation_request_hook(span: Any, scope: dict[str, Any]) -> None:
    # Runs before the correlation middleware, so only a caller-supplied id is known here.
    if span is None or not span.is_recording():
        return
    for name, value in scope.get("headers", []):
        if name == b"x-correlation-id":
            span.set_attribute("correlation_id", value.decode("latin-1"))
            return
