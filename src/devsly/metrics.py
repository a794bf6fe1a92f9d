"""Prometheus instrumentation for outgoing SDK requests."""

from __future__ import annotations

from prometheus_client import Counter, Histogram

REQUEST_COUNTER = Counter(
    "devsly_sdk_requests_total",
    "Completed DevSLY API calls by outcome",
    ["method", "outcome"],
)
RETRY_COUNTER = Counter(
    "devsly_sdk_request_retries_total",
    "Attempts retried after a transport failure",
    ["method"],
)
REQUEST_LATENCY = Histogram(
    "devsly_sdk_request_latency_seconds",
    "Latency of a single request attempt",
    ["method"],
)


def record_outcome(method: str, outcome: str) -> None:
    REQUEST_COUNTER.labels(method=method, outcome=outcome).inc()


def record_retry(method: str) -> None:
    RETRY_COUNTER.labels(method=method).inc()


__all__ = ["REQUEST_COUNTER", "RETRY_COUNTER", "REQUEST_LATENCY", "record_outcome", "record_retry"]
