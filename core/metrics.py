"""
Prometheus metrics for the license control center.

Custom metrics for business logic and performance monitoring.
"""

from prometheus_client import Counter, Histogram

# HTTP metrics
http_requests_total = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status_code"],
)

http_request_duration_seconds = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
    buckets=[0.01, 0.05, 0.1, 0.5, 1.0, 2.0, 5.0, 10.0],
)

# License metrics
licenses_generated_total = Counter(
    "licenses_generated_total",
    "Total licenses issued",
    ["product_type", "source"],
)

licenses_activated_total = Counter(
    "licenses_activated_total",
    "Total successful device activations",
    ["product_type", "reactivation"],
)

licenses_renewed_total = Counter(
    "licenses_renewed_total",
    "Total license renewals",
    ["product_type"],
)

license_state_changes_total = Counter(
    "license_state_changes_total",
    "License pause, resume, revoke and expiry transitions",
    ["transition"],
)

device_limit_rejections_total = Counter(
    "device_limit_rejections_total",
    "Activations rejected because the device limit was reached",
)

# Clinic metrics
clinic_registrations_total = Counter(
    "clinic_registrations_total",
    "Total clinic self-registrations",
)

clinic_decisions_total = Counter(
    "clinic_decisions_total",
    "Clinic approvals, rejections and status toggles",
    ["decision"],
)

forced_logouts_total = Counter(
    "forced_logouts_total",
    "Session revocations triggered for clinics or users",
    ["reason"],
)

# Cache metrics
cache_hits_total = Counter(
    "cache_hits_total",
    "Total cache hits",
    ["cache_key"],
)

cache_misses_total = Counter(
    "cache_misses_total",
    "Total cache misses",
    ["cache_key"],
)

# Error metrics
errors_total = Counter(
    "errors_total",
    "Total errors returned by the API",
    ["error_type", "endpoint"],
)
