"""Prometheus counters for errors that reach the reporting boundary."""

from __future__ import annotations

from prometheus_client import REGISTRY, CollectorRegistry, Counter

from api_errors.core.errors import ClassifiedError


def _build_counter(registry: CollectorRegistry) -> Counter:
    return Counter(
        "api_errors_reported",
        "Classified errors returned to API clients.",
        labelnames=("category", "code", "status"),
        registry=registry,
    )


try:
    ERRORS_REPORTED = _build_counter(REGISTRY)
except ValueError as error:  # pragma: no cover - occurs only on reload
    if "Duplicated timeseries" not in str(error) and "Duplicated time series" not in str(error):
        raise
    ERRORS_REPORTED = _build_counter(CollectorRegistry())


def record_error(err: ClassifiedError) -> None:
    """Count one reported error under its category, code and status."""
    ERRORS_REPORTED.labels(str(err.category), err.code, str(err.http_status)).inc()


__all__ = ["ERRORS_REPORTED", "record_error"]
