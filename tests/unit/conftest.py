"""Unit test environment helpers."""

import pytest

_ISOLATED_ENV = (
    "AWS_REGION",
    "ATHENA_DATABASE",
    "ATHENA_CATALOG",
    "ATHENA_WORKGROUP",
    "ATHENA_OUTPUT_LOCATION",
    "ATHENA_RESULT_REUSE_ENABLED",
    "ATHENA_RESULT_REUSE_MAX_AGE_MINUTES",
    "ATHENA_POLL_INTERVAL_SECONDS",
    "DAL_TRACE_QUERIES",
    "DAL_QUERY_METRICS_ENABLED",
    "OTEL_EXPORTER_OTLP_ENDPOINT",
    "OTEL_EXPORTER_OTLP_METRICS_ENDPOINT",
    "OTEL_METRICS_EXPORTER",
    "OTEL_DISABLE_EXPORTER",
)


@pytest.fixture(autouse=True)
def _minimal_env(monkeypatch):
    """Keep unit tests independent of the caller's AWS and OTEL environment."""
    for name in _ISOLATED_ENV:
        monkeypatch.delenv(name, raising=False)
    yield
