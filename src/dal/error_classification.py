from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

RETRYABLE_CATEGORIES = frozenset(
    {"timeout", "connectivity", "throttling", "resource_exhausted", "transient"}
)


@dataclass(frozen=True)
class ErrorClassification:
    """Structured provider-aware error classification."""

    category: str
    provider: str
    is_retryable: bool
    retry_after_seconds: Optional[float] = None


def classify_error_info(
    provider: str, exc: Exception, code: Optional[str] = None
) -> ErrorClassification:
    """Classify an error into a provider-aware category with retryability.

    ``code`` is the service error code (e.g. an AWS ``Error.Code``) when known.
    """
    message = str(exc).lower()
    class_name = exc.__class__.__name__.lower()
    code = (code or "").lower()
    provider = (provider or "unknown").lower()

    retry_after = _extract_retry_after_seconds(message)

    if code in {"throttlingexception", "toomanyrequestsexception"}:
        return _classification("throttling", provider, retry_after)
    if code in {"accessdeniedexception", "unrecognizedclientexception"}:
        return _classification("auth", provider, retry_after)
    if code == "internalserverexception":
        return _classification("transient", provider, retry_after)

    if isinstance(exc, TimeoutError) or _matches_any(message, ("timeout", "timed out")):
        return _classification("timeout", provider, retry_after)
    if _matches_any(
        message,
        (
            "could not connect",
            "connection refused",
            "connection reset",
            "endpoint url",
            "network",
            "dns",
        ),
    ):
        return _classification("connectivity", provider, retry_after)
    if _matches_any(
        message,
        ("permission denied", "not authorized", "access denied", "unauthorized", "credentials"),
    ):
        return _classification("auth", provider, retry_after)
    if _matches_any(message, ("syntax error", "mismatched input", "parse error", "invalid query")):
        return _classification("syntax", provider, retry_after)

    if provider == "athena" and _matches_any(
        message, ("service unavailable", "temporarily unavailable", "slow down")
    ):
        return _classification("transient", provider, retry_after)

    if _matches_any(message, ("too many requests", "rate exceeded", "rate limit", "throttl")):
        return _classification("throttling", provider, retry_after)
    if _matches_any(message, ("resources exceeded", "resource limit", "out of memory")):
        return _classification("resource_exhausted", provider, retry_after)

    if class_name in {"connectionerror", "endpointconnectionerror", "connectionclosederror"}:
        return _classification("connectivity", provider, retry_after)

    return _classification("unknown", provider, retry_after)


def _matches_any(text: str, fragments: tuple[str, ...]) -> bool:
    return any(fragment in text for fragment in fragments)


def _classification(
    category: str, provider: str, retry_after: Optional[float]
) -> ErrorClassification:
    return ErrorClassification(
        category=category,
        provider=provider,
        is_retryable=category in RETRYABLE_CATEGORIES,
        retry_after_seconds=retry_after,
    )


def _extract_retry_after_seconds(message: str) -> Optional[float]:
    match = re.search(r"retry after\s+(\d+(?:\.\d+)?)", message)
    if not match:
        return None
    try:
        return float(match.group(1))
    except ValueError:
        return None
