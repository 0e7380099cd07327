"""Tests for DAL query tracing."""

from unittest.mock import MagicMock, patch

import pytest

from common.observability.context import run_id_var
from dal.tracing import trace_enabled, trace_query_operation


async def _result(value):
    return value


async def _boom():
    raise RuntimeError("boom")


@pytest.mark.asyncio
async def test_trace_disabled_passes_result_through(monkeypatch):
    monkeypatch.setenv("DAL_TRACE_QUERIES", "false")

    assert trace_enabled() is False
    assert await trace_query_operation("dal.query.poll", "athena", "async", None, _result(7)) == 7


@pytest.mark.asyncio
async def test_trace_enabled_sets_span_attributes(monkeypatch):
    """Enabled tracing records provider, statement hash, execution id and status."""
    monkeypatch.setenv("DAL_TRACE_QUERIES", "true")
    span = MagicMock()
    tracer = MagicMock()
    tracer.start_as_current_span.return_value.__enter__.return_value = span
    token = run_id_var.set("run-123")

    try:
        with patch("opentelemetry.trace.get_tracer", return_value=tracer):
            result = await trace_query_operation(
                "dal.query.submit",
                provider="athena",
                execution_model="async",
                sql="SELECT 1",
                execution_id="exec-1",
                operation=_result("exec-1"),
            )
    finally:
        run_id_var.reset(token)

    assert result == "exec-1"
    tracer.start_as_current_span.assert_called_once_with("dal.query.submit")
    attributes = {call.args[0]: call.args[1] for call in span.set_attribute.call_args_list}
    assert attributes["run_id"] == "run-123"
    assert attributes["db.provider"] == "athena"
    assert attributes["db.execution_id"] == "exec-1"
    assert len(attributes["db.statement_hash"]) == 64
    assert attributes["db.status"] == "ok"


@pytest.mark.asyncio
async def test_trace_enabled_marks_error_and_reraises(monkeypatch):
    monkeypatch.setenv("DAL_TRACE_QUERIES", "1")
    span = MagicMock()
    tracer = MagicMock()
    tracer.start_as_current_span.return_value.__enter__.return_value = span

    with patch("opentelemetry.trace.get_tracer", return_value=tracer):
        with pytest.raises(RuntimeError, match="boom"):
            await trace_query_operation("dal.query.fetch", "athena", "async", None, _boom())

    span.set_attribute.assert_any_call("db.status", "error")
