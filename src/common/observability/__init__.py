"""Shared observability helpers."""

from common.observability.context import run_id_var
from common.observability.metrics import dal_metrics

__all__ = ["dal_metrics", "run_id_var"]
