import logging
from typing import List, Optional

from common.observability.metrics import dal_metrics
from dal.async_query_executor import AsyncQueryExecutor, RawRow

logger = logging.getLogger(__name__)


async def fetch_all(executor: AsyncQueryExecutor, execution_id: str) -> List[RawRow]:
    """Fetch every result page of a completed execution, in delivery order.

    Pages are requested strictly one after another, following the continuation
    token until the service omits it. The first row returned is the header row.
    """
    rows: List[RawRow] = []
    next_token: Optional[str] = None
    pages = 0

    while True:
        page = await executor.get_results_page(execution_id, next_token)
        pages += 1
        rows.extend(page.rows)
        logger.debug(
            "Athena query %s page %d: %d rows (more=%s)",
            execution_id,
            pages,
            len(page.rows),
            page.next_token is not None,
        )
        next_token = page.next_token
        if not next_token:
            break

    dal_metrics.add_counter("dal.query.pages", pages, attributes={"provider": "athena"})
    return rows
