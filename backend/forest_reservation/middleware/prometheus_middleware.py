"""
Prometheus metrics middleware for HTTP request tracking.

Tracks request duration, status codes and in-progress requests for every
route except the metrics endpoint itself.
"""

import re
import time
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from ..core.reservation_id import is_valid_reservation_id
from ..monitoring.prometheus_metrics import prometheus_metrics

_DATE_SEGMENT = re.compile(r"^\d{4}-\d{2}(-\d{2})?$")


def normalize_path(raw_path: str) -> str:
    """
    Collapse dates, ids and numbers into placeholders to keep label cardinality low.

    /api/availability/date/2024-06-10 -> /api/availability/date/:date
    /api/reservations/AR-240610-1234  -> /api/reservations/:id
    """
    segments = []
    for segment in raw_path.split("/"):
        if _DATE_SEGMENT.match(segment):
            segments.append(":date")
        elif is_valid_reservation_id(segment) or segment.isdigit():
            segments.append(":id")
        else:
            segments.append(segment)
    return "/".join(segments)


class PrometheusMiddleware(BaseHTTPMiddleware):
    """Middleware to collect Prometheus metrics for HTTP requests."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if request.url.path == "/metrics":
            return await call_next(request)

        method = request.method
        path = normalize_path(request.url.path)

        prometheus_metrics.track_http_request_start(method, path)
        start_time = time.time()
        try:
            response = await call_next(request)
            prometheus_metrics.record_http_request(
                method=method,
                endpoint=path,
                duration=time.time() - start_time,
                status_code=response.status_code,
            )
            return response
        finally:
            prometheus_metrics.track_http_request_end(method, path)
