"""Observability utilities (metrics, logging)."""

from .metrics import (
    DISPATCH_TOTAL,
    CACHE_LOOKUPS_TOTAL,
    TRANSACTIONS_TOTAL,
    EVENTS_FIRED_TOTAL,
    render_metrics,
    METRICS_CONTENT_TYPE,
)
from .structured_logging import configure_structlog, get_logger

__all__ = [
    "DISPATCH_TOTAL",
    "CACHE_LOOKUPS_TOTAL",
    "TRANSACTIONS_TOTAL",
    "EVENTS_FIRED_TOTAL",
    "render_metrics",
    "METRICS_CONTENT_TYPE",
    "configure_structlog",
    "get_logger",
]
