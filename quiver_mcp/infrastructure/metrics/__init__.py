"""Metrics infrastructure for monitoring"""

from .prometheus_metrics import (
    OUTCOME_SUCCESS,
    OUTCOME_UPSTREAM_ERROR,
    OUTCOME_VALIDATION_ERROR,
    ToolCallMetrics,
    get_metrics,
)

__all__ = [
    "OUTCOME_SUCCESS",
    "OUTCOME_UPSTREAM_ERROR",
    "OUTCOME_VALIDATION_ERROR",
    "ToolCallMetrics",
    "get_metrics",
]
