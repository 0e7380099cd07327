import asyncio
import logging
from typing import Any, Callable, Dict, Optional

from botocore.exceptions import BotoCoreError, ClientError

from dal.async_query_executor import (
    AsyncQueryExecutor,
    ExecutionStatus,
    QueryStatus,
    RawRow,
    ResultPage,
)
from dal.athena.config import AthenaQueryConfig
from dal.athena.errors import ServiceError
from dal.error_classification import classify_error_info
from dal.tracing import trace_query_operation

logger = logging.getLogger(__name__)


class AthenaAsyncQueryExecutor(AsyncQueryExecutor):
    """AsyncQueryExecutor backed by Athena query executions."""

    def __init__(self, config: AthenaQueryConfig, client: Optional[Any] = None) -> None:
        """Initialize executor with Athena connection settings.

        ``client`` is a boto3 Athena client; one is built from ``config`` when omitted.
        """
        if client is None:
            import boto3

            client = boto3.client("athena", region_name=config.region)
        self._client = client
        self._config = config

    async def submit(self, sql: str) -> str:
        """Submit a query for asynchronous execution."""
        return await trace_query_operation(
            "dal.query.submit",
            provider="athena",
            execution_model="async",
            sql=sql,
            operation=asyncio.to_thread(_start_query_execution, self._client, sql, self._config),
        )

    async def get_status(self, execution_id: str) -> ExecutionStatus:
        """Return the current status of a submitted query."""
        return await trace_query_operation(
            "dal.query.poll",
            provider="athena",
            execution_model="async",
            sql=None,
            execution_id=execution_id,
            operation=asyncio.to_thread(_get_query_status, self._client, execution_id),
        )

    async def get_results_page(
        self, execution_id: str, next_token: Optional[str] = None
    ) -> ResultPage:
        """Fetch one page of results for a completed query."""
        return await trace_query_operation(
            "dal.query.fetch",
            provider="athena",
            execution_model="async",
            sql=None,
            execution_id=execution_id,
            operation=asyncio.to_thread(
                _get_query_results_page, self._client, execution_id, next_token
            ),
        )

    async def cancel(self, execution_id: str) -> None:
        """Stop a running query."""
        logger.info("Stopping Athena query %s", execution_id)
        await trace_query_operation(
            "dal.query.cancel",
            provider="athena",
            execution_model="async",
            sql=None,
            execution_id=execution_id,
            operation=asyncio.to_thread(
                _call,
                "StopQueryExecution",
                self._client.stop_query_execution,
                QueryExecutionId=execution_id,
            ),
        )


def _call(operation: str, method: Callable[..., Dict[str, Any]], **kwargs: Any) -> Dict[str, Any]:
    """Invoke a boto3 method, translating botocore failures into ServiceError."""
    try:
        return method(**kwargs)
    except ClientError as exc:
        error = exc.response.get("Error", {})
        code = error.get("Code")
        raise ServiceError(
            operation,
            error.get("Message") or str(exc),
            code=code,
            classification=classify_error_info("athena", exc, code=code),
        ) from exc
    except BotoCoreError as exc:
        raise ServiceError(
            operation, str(exc), classification=classify_error_info("athena", exc)
        ) from exc


def _start_query_execution(client, sql: str, config: AthenaQueryConfig) -> str:
    request: Dict[str, Any] = {
        "QueryString": sql,
        "QueryExecutionContext": {"Database": config.database, "Catalog": config.catalog},
        "WorkGroup": config.workgroup,
        "ResultReuseConfiguration": config.result_reuse.to_request(),
    }
    if config.output_location:
        request["ResultConfiguration"] = {"OutputLocation": config.output_location}
    response = _call("StartQueryExecution", client.start_query_execution, **request)
    return response["QueryExecutionId"]


def _get_query_status(client, execution_id: str) -> ExecutionStatus:
    response = _call(
        "GetQueryExecution", client.get_query_execution, QueryExecutionId=execution_id
    )
    status = response["QueryExecution"]["Status"]
    state = _map_status(status["State"])
    reason = status.get("StateChangeReason") if state == QueryStatus.FAILED else None
    return ExecutionStatus(state=state, reason=reason)


def _get_query_results_page(client, execution_id: str, next_token: Optional[str]) -> ResultPage:
    kwargs: Dict[str, Any] = {"QueryExecutionId": execution_id}
    if next_token:
        kwargs["NextToken"] = next_token
    response = _call("GetQueryResults", client.get_query_results, **kwargs)
    rows = (response.get("ResultSet") or {}).get("Rows") or []
    return ResultPage(
        rows=[_raw_row(row) for row in rows],
        next_token=response.get("NextToken") or None,
    )


def _raw_row(row: Dict[str, Any]) -> RawRow:
    return [datum.get("VarCharValue") for datum in row.get("Data") or []]


def _map_status(state: str) -> QueryStatus:
    try:
        return QueryStatus(state)
    except ValueError:
        raise ServiceError("GetQueryExecution", f"unknown query state {state!r}") from None
