"""
Prometheus metrics for the license service.

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

# Payment metrics
orders_created_total = Counter(
    "orders_created_total",
    "Total orders recorded after a checkout link was obtained",
)

payment_confirmations_total = Counter(
    "payment_confirmations_total",
    "Payment confirmations received",
    ["channel", "outcome"],
)

webhook_errors_total = Counter(
    "webhook_errors_total",
    "Webhook deliveries that failed internally but were acknowledged",
)

upstream_errors_total = Counter(
    "upstream_errors_total",
    "Failed calls to the payment provider",
)

# License metrics
licenses_issued_total = Counter(
    "licenses_issued_total",
    "Total licenses minted",
)

license_activations_total = Counter(
    "license_activations_total",
    "License activation attempts",
    ["outcome"],
)

devices_bound_total = Counter(
    "devices_bound_total",
    "Devices bound to a license",
)

# Error metrics
errors_total = Counter(
    "errors_total",
    "Total errors",
    ["error_type", "endpoint"],
)
