from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Protocol, runtime_checkable

RawRow = List[Optional[str]]


class QueryStatus(str, Enum):
    """Async query lifecycle states reported by the execution service."""

    QUEUED = "QUEUED"
    RUNNING = "RUNNING"
    SUCCEEDED = "SUCCEEDED"
    FAILED = "FAILED"
    CANCELLED = "CANCELLED"

    @property
    def is_terminal(self) -> bool:
        """Return True for states that never transition again."""
        return self not in (QueryStatus.QUEUED, QueryStatus.RUNNING)


@dataclass(frozen=True)
class ExecutionStatus:
    """Observed state of one execution; reason is only set for FAILED."""

    state: QueryStatus
    reason: Optional[str] = None

    @property
    def is_terminal(self) -> bool:
        return self.state.is_terminal


@dataclass(frozen=True)
class ResultPage:
    """One page of raw rows; a missing next_token marks the last page."""

    rows: List[RawRow] = field(default_factory=list)
    next_token: Optional[str] = None


@runtime_checkable
class AsyncQueryExecutor(Protocol):
    """Protocol for async/job-style query execution."""

    async def submit(self, sql: str) -> str:
        """Submit a query for asynchronous execution and return its execution id."""
        ...

    async def get_status(self, execution_id: str) -> ExecutionStatus:
        """Return the current status of an in-flight execution."""
        ...

    async def get_results_page(
        self, execution_id: str, next_token: Optional[str] = None
    ) -> ResultPage:
        """Fetch one page of results for a completed execution."""
        ...

    async def cancel(self, execution_id: str) -> None:
        """Stop a running execution."""
        ...
