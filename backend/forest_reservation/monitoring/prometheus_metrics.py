"""
Prometheus metrics module for the forest reservation service.

Service timings come from the @measure_operation decorator on BaseService;
booking-specific counters are incremented by the reservation flow.
"""

import os
from threading import Lock
from time import monotonic
from typing import Optional, cast

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Gauge,
    Histogram,
    generate_latest,
)

# Create a custom registry to avoid conflicts with default metrics
REGISTRY = CollectorRegistry()

http_request_duration_seconds = Histogram(
    "forest_reservation_http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint", "status_code"],
    registry=REGISTRY,
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0),
)

http_requests_total = Counter(
    "forest_reservation_http_requests_total",
    "Total number of HTTP requests",
    ["method", "endpoint", "status_code"],
    registry=REGISTRY,
)

http_requests_in_progress = Gauge(
    "forest_reservation_http_requests_in_progress",
    "Number of HTTP requests currently being processed",
    ["method", "endpoint"],
    registry=REGISTRY,
)

service_operation_duration_seconds = Histogram(
    "forest_reservation_service_operation_duration_seconds",
    "Service operation duration in seconds",
    ["service", "operation"],
    registry=REGISTRY,
    buckets=(0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5),
)

service_operations_total = Counter(
    "forest_reservation_service_operations_total",
    "Total number of service operations",
    ["service", "operation", "status"],
    registry=REGISTRY,
)

errors_total = Counter(
    "forest_reservation_errors_total",
    "Total number of errors",
    ["service", "operation", "error_type"],
    registry=REGISTRY,
)

reservations_created_total = Counter(
    "forest_reservation_reservations_created_total",
    "Reservations successfully created",
    ["time_slot"],
    registry=REGISTRY,
)

reservations_rejected_total = Counter(
    "forest_reservation_reservations_rejected_total",
    "Reservation attempts rejected by availability rules",
    ["reason"],
    registry=REGISTRY,
)

reservations_deleted_total = Counter(
    "forest_reservation_reservations_deleted_total",
    "Reservations deleted by an administrator",
    ["time_slot"],
    registry=REGISTRY,
)

slot_lock_wait_seconds = Histogram(
    "forest_reservation_slot_lock_wait_seconds",
    "Time spent waiting for a per-slot lock",
    ["lock"],
    registry=REGISTRY,
    buckets=(0.0005, 0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0, 5.0),
)

seeded_slots_total = Counter(
    "forest_reservation_seeded_slots_total",
    "Availability slots created by seeding",
    registry=REGISTRY,
)


def _metrics_ttl_seconds() -> float:
    raw = os.getenv("PROMETHEUS_CACHE_TTL_SECONDS", "1.0")
    try:
        return max(float(raw), 0.0)
    except ValueError:
        return 1.0


class PrometheusMetrics:
    """Manages Prometheus metrics collection and exposure."""

    _cache_lock: Lock = Lock()
    _cache_payload: Optional[bytes] = None
    _cache_ts: Optional[float] = None
    _cache_ttl_seconds: float = _metrics_ttl_seconds()

    @staticmethod
    def record_http_request(method: str, endpoint: str, duration: float, status_code: int) -> None:
        """Record HTTP request metrics."""
        labels = {"method": method, "endpoint": endpoint, "status_code": str(status_code)}

        http_request_duration_seconds.labels(**labels).observe(duration)
        http_requests_total.labels(**labels).inc()
        PrometheusMetrics._invalidate_cache()

    @staticmethod
    def track_http_request_start(method: str, endpoint: str) -> None:
        http_requests_in_progress.labels(method=method, endpoint=endpoint).inc()

    @staticmethod
    def track_http_request_end(method: str, endpoint: str) -> None:
        http_requests_in_progress.labels(method=method, endpoint=endpoint).dec()

    @staticmethod
    def record_service_operation(
        service: str,
        operation: str,
        duration: float,
        status: str = "success",
        error_type: Optional[str] = None,
    ) -> None:
        """
        Record service operation metrics from @measure_operation decorator.

        Args:
            service: Service name (e.g., 'ReservationService')
            operation: Operation/method name (e.g., 'create_reservation')
            duration: Operation duration in seconds
            status: Operation status ('success' or 'error')
            error_type: Type of error if status is 'error'
        """
        service_operation_duration_seconds.labels(service=service, operation=operation).observe(
            duration
        )
        service_operations_total.labels(service=service, operation=operation, status=status).inc()

        if status == "error" and error_type:
            errors_total.labels(service=service, operation=operation, error_type=error_type).inc()
        PrometheusMetrics._invalidate_cache()

    @staticmethod
    def record_reservation_created(time_slot: str) -> None:
        reservations_created_total.labels(time_slot=time_slot).inc()
        PrometheusMetrics._invalidate_cache()

    @staticmethod
    def record_reservation_rejected(reason: str) -> None:
        reservations_rejected_total.labels(reason=reason).inc()
        PrometheusMetrics._invalidate_cache()

    @staticmethod
    def record_reservation_deleted(time_slot: str) -> None:
        reservations_deleted_total.labels(time_slot=time_slot).inc()
        PrometheusMetrics._invalidate_cache()

    @staticmethod
    def observe_slot_lock_wait(lock: str, duration: float) -> None:
        slot_lock_wait_seconds.labels(lock=lock).observe(max(duration, 0.0))

    @staticmethod
    def record_seeded_slots(count: int) -> None:
        if count > 0:
            seeded_slots_total.inc(count)
            PrometheusMetrics._invalidate_cache()

    @staticmethod
    def get_metrics() -> bytes:
        """
        Generate Prometheus metrics in exposition format.

        Returns:
            Metrics data in Prometheus text format
        """
        now = monotonic()
        payload = PrometheusMetrics._cache_payload
        ts = PrometheusMetrics._cache_ts
        ttl = PrometheusMetrics._cache_ttl_seconds

        if payload is not None and ts is not None and (now - ts) <= ttl:
            return payload

        with PrometheusMetrics._cache_lock:
            payload = PrometheusMetrics._cache_payload
            ts = PrometheusMetrics._cache_ts

            if payload is None or ts is None or (now - ts) > PrometheusMetrics._cache_ttl_seconds:
                PrometheusMetrics._refresh_cache_locked()
                payload = PrometheusMetrics._cache_payload

        return cast(bytes, payload)

    @staticmethod
    def get_content_type() -> str:
        return cast(str, CONTENT_TYPE_LATEST)

    @staticmethod
    def _refresh_cache_locked() -> None:
        """Refresh cached metrics payload. Caller must hold lock."""
        PrometheusMetrics._cache_payload = cast(bytes, generate_latest(REGISTRY))
        PrometheusMetrics._cache_ts = monotonic()
        PrometheusMetrics._cache_ttl_seconds = _metrics_ttl_seconds()

    @staticmethod
    def _invalidate_cache() -> None:
        with PrometheusMetrics._cache_lock:
            PrometheusMetrics._cache_ts = None
            PrometheusMetrics._cache_payload = None


prometheus_metrics = PrometheusMetrics()
