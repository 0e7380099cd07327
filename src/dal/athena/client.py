import asyncio
import logging
import time
from typing import Any, List, Optional

from common.observability.metrics import dal_metrics
from dal.async_query_executor import AsyncQueryExecutor, QueryStatus
from dal.async_utils import with_timeout
from dal.athena.config import AthenaQueryConfig
from dal.athena.errors import ExecutionCancelled, ExecutionFailed
from dal.athena.executor import AthenaAsyncQueryExecutor
from dal.athena.paginator import fetch_all
from dal.athena.poller import await_completion
from dal.athena.row_mapper import Record, map_rows

logger = logging.getLogger(__name__)

# Upper bound on waiting for an in-flight submit so a timed-out query can be stopped.
SUBMIT_SETTLE_SECONDS = 30.0


class AthenaQueryClient:
    """Run SQL on Athena and return the result set as a list of string records.

    One client holds an immutable query context and may serve concurrent
    ``query`` calls; each call tracks its own execution.
    """

    def __init__(
        self,
        config: AthenaQueryConfig,
        client: Optional[Any] = None,
        executor: Optional[AsyncQueryExecutor] = None,
    ) -> None:
        """Build a query client.

        Args:
            config: Database, catalog, workgroup and result-reuse settings.
            client: Optional boto3 Athena client to share instead of creating one.
            executor: Optional pre-built executor; overrides ``client``.
        """
        self._config = config
        self._executor = executor or AthenaAsyncQueryExecutor(config, client=client)

    @property
    def database(self) -> str:
        return self._config.database

    @property
    def config(self) -> AthenaQueryConfig:
        return self._config

    async def query(self, sql: str, timeout_seconds: Optional[float] = None) -> List[Record]:
        """Execute ``sql`` and return its mapped records.

        Raises ExecutionFailed or ExecutionCancelled when the execution does not
        succeed, EmptyResultSet when no header row comes back, and ServiceError
        on any service call failure. With ``timeout_seconds`` set, an overrunning
        execution is stopped and ``asyncio.TimeoutError`` is raised.
        """
        execution_id: Optional[str] = None
        submit_task: Optional[asyncio.Future] = None

        async def _run() -> List[Record]:
            nonlocal execution_id, submit_task
            submit_task = asyncio.ensure_future(self._executor.submit(sql))
            # Shielded so a deadline during submit leaves the id recoverable.
            execution_id = await asyncio.shield(submit_task)
            logger.info("Submitted Athena query %s", execution_id)
            return await self._collect(execution_id)

        async def _stop() -> None:
            nonlocal execution_id
            if execution_id is None and submit_task is not None:
                execution_id = await asyncio.wait_for(submit_task, SUBMIT_SETTLE_SECONDS)
            if execution_id is not None:
                logger.warning(
                    "Athena query %s exceeded %ss deadline", execution_id, timeout_seconds
                )
                await self._executor.cancel(execution_id)

        started_at = time.monotonic()
        records = await with_timeout(_run(), timeout_seconds=timeout_seconds, on_timeout=_stop)
        elapsed = time.monotonic() - started_at
        dal_metrics.record_histogram(
            "dal.query.duration", elapsed, attributes={"provider": "athena"}
        )
        logger.info(
            "Athena query %s returned %d records in %.2fs", execution_id, len(records), elapsed
        )
        return records

    async def _collect(self, execution_id: str) -> List[Record]:
        status = await await_completion(
            self._executor,
            execution_id,
            poll_interval_seconds=self._config.poll_interval_seconds,
        )
        if status.state == QueryStatus.FAILED:
            logger.warning("Athena query %s failed: %s", execution_id, status.reason)
            raise ExecutionFailed(status.reason, execution_id=execution_id)
        if status.state == QueryStatus.CANCELLED:
            logger.warning("Athena query %s was cancelled", execution_id)
            raise ExecutionCancelled(execution_id=execution_id)

        rows = await fetch_all(self._executor, execution_id)
        return map_rows(rows)
