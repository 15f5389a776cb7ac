"""Prometheus metrics exposition router.

Registers a /metrics endpoint exposing the prometheus_client default registry in
Prometheus text format.
"""
from fastapi import APIRouter, Response
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest

router = APIRouter()

APP_REQUEST_COUNT = Counter(
    "app_requests_total",
    "Total HTTP requests processed",
    ["method", "path", "status"],
)
APP_REQUEST_LATENCY = Histogram(
    "app_request_duration_seconds",
    "Request latency in seconds",
    ["method", "path", "status"],
)
FORMAT_OPERATIONS = Counter(
    "format_operations_total",
    "Engine operations served over HTTP",
    ["operation"],
)


@router.get("/metrics", include_in_schema=False)
async def prometheus_metrics() -> Response:  # noqa: D401
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)


__all__ = ["router", "APP_REQUEST_COUNT", "APP_REQUEST_LATENCY", "FORMAT_OPERATIONS"]
