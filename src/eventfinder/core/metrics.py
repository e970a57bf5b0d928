"""
Prometheus metrics for monitoring
"""
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest

# ==================== HTTP Metrics ====================

http_requests_total = Counter(
    'http_requests_total',
    'Total HTTP requests',
    ['method', 'endpoint', 'status']
)

http_request_duration_seconds = Histogram(
    'http_request_duration_seconds',
    'HTTP request duration in seconds',
    ['method', 'endpoint']
)

# ==================== Booking Metrics ====================

bookings_created_total = Counter(
    'bookings_created_total',
    'Total bookings created'
)

bookings_confirmed_total = Counter(
    'bookings_confirmed_total',
    'Total bookings confirmed',
    ['kind']  # free, paid
)

bookings_failed_total = Counter(
    'bookings_failed_total',
    'Total bookings failed or expired',
    ['reason']  # payment_failed, sold_out, expired
)

bookings_cancelled_total = Counter(
    'bookings_cancelled_total',
    'Total bookings cancelled'
)

tickets_registered_total = Counter(
    'tickets_registered_total',
    'Total tickets counted against event capacity'
)

# ==================== Rate Limiting Metrics ====================

rate_limit_hits_total = Counter(
    'rate_limit_hits_total',
    'Total rate limit hits',
    ['endpoint']
)


def observe_request(method: str, endpoint: str, status: int, duration_seconds: float) -> None:
    http_requests_total.labels(method=method, endpoint=endpoint, status=str(status)).inc()
    http_request_duration_seconds.labels(method=method, endpoint=endpoint).observe(duration_seconds)


def get_metrics() -> bytes:
    """Get current metrics in Prometheus format"""
    return generate_latest()


__all__ = [
    "CONTENT_TYPE_LATEST",
    "bookings_cancelled_total",
    "bookings_confirmed_total",
    "bookings_created_total",
    "bookings_failed_total",
    "get_metrics",
    "observe_request",
    "rate_limit_hits_total",
    "tickets_registered_total",
]
