import asyncio
import logging

from common.observability.metrics import dal_metrics
from dal.async_query_executor import AsyncQueryExecutor, ExecutionStatus
from dal.athena.config import DEFAULT_POLL_INTERVAL_SECONDS

logger = logging.getLogger(__name__)


async def await_completion(
    executor: AsyncQueryExecutor,
    execution_id: str,
    poll_interval_seconds: float = DEFAULT_POLL_INTERVAL_SECONDS,
) -> ExecutionStatus:
    """Poll an execution until it reaches a terminal state and return that status.

    The status is queried once per iteration with a constant sleep between
    non-terminal observations. There is no iteration cap; service errors
    propagate on first occurrence.
    """
    status = await executor.get_status(execution_id)
    dal_metrics.add_counter("dal.query.polls", attributes={"provider": "athena"})
    while not status.is_terminal:
        logger.debug("Athena query %s is %s", execution_id, status.state.value)
        await asyncio.sleep(poll_interval_seconds)
        status = await executor.get_status(execution_id)
        dal_metrics.add_counter("dal.query.polls", attributes={"provider": "athena"})
    return status
