"""Athena-backed DAL components."""

from .client import AthenaQueryClient
from .config import AthenaQueryConfig, ResultReuseConfig
from .errors import (
    AthenaQueryError,
    EmptyResultSet,
    ExecutionCancelled,
    ExecutionFailed,
    ServiceError,
)
from .executor import AthenaAsyncQueryExecutor
from .paginator import fetch_all
from .poller import await_completion
from .row_mapper import Record, map_rows

__all__ = [
    "AthenaAsyncQueryExecutor",
    "AthenaQueryClient",
    "AthenaQueryConfig",
    "AthenaQueryError",
    "EmptyResultSet",
    "ExecutionCancelled",
    "ExecutionFailed",
    "Record",
    "ResultReuseConfig",
    "ServiceError",
    "await_completion",
    "fetch_all",
    "map_rows",
]
