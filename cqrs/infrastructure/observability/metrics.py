"""Prometheus metrics definitions."""
from __future__ import annotations

from prometheus_client import Counter, generate_latest, CONTENT_TYPE_LATEST


DISPATCH_TOTAL = Counter(
    "cqrs_dispatch_total",
    "Total runnables dispatched",
    ["kind"],
)

CACHE_LOOKUPS_TOTAL = Counter(
    "cqrs_cache_lookups_total",
    "Cache lookups by result",
    ["result"],
)

TRANSACTIONS_TOTAL = Counter(
    "cqrs_transactions_total",
    "Transactions by outcome",
    ["outcome"],
)

EVENTS_FIRED_TOTAL = Counter(
    "cqrs_events_fired_total",
    "Events fired through the dispatcher",
    ["mode"],
)


def render_metrics() -> bytes:
    return generate_latest()


METRICS_CONTENT_TYPE = CONTENT_TYPE_LATEST
