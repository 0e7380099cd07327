"""Exceptions raised by the Athena query client."""

from typing import Optional

from dal.error_classification import ErrorClassification


class AthenaQueryError(Exception):
    """Base class for every failure surfaced by ``AthenaQueryClient.query``."""


class ExecutionFailed(AthenaQueryError):
    """The execution reached FAILED; ``reason`` is the service message, verbatim."""

    def __init__(self, reason: Optional[str], execution_id: Optional[str] = None) -> None:
        self.reason = reason
        self.execution_id = execution_id
        super().__init__(f"Query failed: {reason}")


class ExecutionCancelled(AthenaQueryError):
    """The execution reached CANCELLED."""

    def __init__(self, execution_id: Optional[str] = None) -> None:
        self.execution_id = execution_id
        super().__init__("Query was cancelled")


class EmptyResultSet(AthenaQueryError):
    """The result set had no rows at all, not even the header row."""

    def __init__(self) -> None:
        super().__init__("Result set contained no header row")


class ServiceError(AthenaQueryError):
    """Transport or service failure during submit, status check, page fetch or stop."""

    def __init__(
        self,
        operation: str,
        message: str,
        code: Optional[str] = None,
        classification: Optional[ErrorClassification] = None,
    ) -> None:
        self.operation = operation
        self.code = code
        self.classification = classification
        super().__init__(f"Athena {operation} failed: {message}")

    @property
    def is_retryable(self) -> bool:
        return bool(self.classification and self.classification.is_retryable)
