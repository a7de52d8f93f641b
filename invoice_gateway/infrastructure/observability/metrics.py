"""Prometheus metrics for calculation volume, rejected input and request latency"""

from prometheus_client import Counter, Histogram

from invoice_gateway.domain.exceptions import ValidationError

# Calculation metrics
computation_counter = Counter(
    "invoice_computations_total",
    "Billing and installment calculations served",
    ["operation"],  # schedule | invoice | progress | billing_dates | purchase_cycle | summary | projection
)

validation_failure_counter = Counter(
    "validation_failures_total",
    "Requests rejected by domain validation",
    ["kind"],  # invalid_date | invalid_configuration
)

override_conflict_counter = Counter(
    "installment_override_conflicts_total",
    "Installments listed as both paid and unpaid",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_computation(operation: str, override_conflicts: int = 0) -> None:
    """Count a served calculation and any paid/unpaid conflicts it resolved"""
    computation_counter.labels(operation=operation).inc()
    if override_conflicts:
        override_conflict_counter.inc(override_conflicts)


def record_validation_failure(error: ValidationError) -> None:
    validation_failure_counter.labels(kind=error.kind).inc()
