from __future__ import annotations

import re

from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest
from starlette.requests import Request


http_requests_total = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["method", "path", "status"],
)

http_request_duration_seconds = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "path"],
)

authz_denied_total = Counter(
    "authz_denied_total",
    "Total requests denied by the authorization gate",
    ["reason"],
)

record_writes_total = Counter(
    "record_writes_total",
    "Total record writes by entity and action",
    ["entity", "action"],
)

journey_aggregations_total = Counter(
    "journey_aggregations_total",
    "Total customer journey aggregations by outcome",
    ["outcome"],
)

journey_events_count = Histogram(
    "journey_events_count",
    "Number of events merged into one customer journey",
    buckets=(0, 1, 5, 10, 25, 50, 100, 250, 500, 1000),
)


_INT_RE = re.compile(r"/\d+\b")
_PATH_PARAM_RE = re.compile(r"\{[^{}]+\}")


def _normalize_route_template(path: str) -> str:
    if path == "/api/contacts/journey/{identifier}":
        return path
    return _PATH_PARAM_RE.sub("{id}", path)


def _sanitize_path(path: str) -> str:
    return _INT_RE.sub("/{id}", path)


def resolve_http_path_label(request: Request) -> str:
    route = request.scope.get("route")
    if route is not None:
        path_format = getattr(route, "path_format", None)
        if isinstance(path_format, str) and path_format:
            return _normalize_route_template(path_format)
        route_path = getattr(route, "path", None)
        if isinstance(route_path, str) and route_path:
            return _normalize_route_template(route_path)
    return _sanitize_path(request.url.path)


def observe_http_request(method: str, path: str, status: int, duration: float) -> None:
    status_str = str(status)
    http_requests_total.labels(method=method, path=path, status=status_str).inc()
    http_request_duration_seconds.labels(method=method, path=path).observe(duration)


def observe_authz_denied(reason: str) -> None:
    authz_denied_total.labels(reason=reason).inc()


def observe_record_write(entity: str, action: str) -> None:
    record_writes_total.labels(entity=entity, action=action).inc()


def observe_journey(outcome: str, event_count: int | None = None) -> None:
    journey_aggregations_total.labels(outcome=outcome).inc()
    if event_count is not None:
        journey_events_count.observe(event_count)


def generate_metrics_payload() -> bytes:
    return generate_latest()


def metrics_content_type() -> str:
    return CONTENT_TYPE_LATEST
