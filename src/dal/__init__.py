"""Data Access Layer (DAL) for asynchronous query-execution services.

Exposes the provider-agnostic execution types; provider clients live in
subpackages such as :mod:`dal.athena`.
"""

from dal.async_query_executor import AsyncQueryExecutor, ExecutionStatus, QueryStatus, ResultPage

__all__ = [
    "AsyncQueryExecutor",
    "ExecutionStatus",
    "QueryStatus",
    "ResultPage",
]
