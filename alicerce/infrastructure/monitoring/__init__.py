"""Operational metrics for the bidding engine."""

from alicerce.infrastructure.monitoring.metrics import (
    METRICS_CONTENT_TYPE,
    EngineMetricsCollector,
    generate_metrics,
    get_metrics_collector,
    reset_metrics_collector,
)

__all__ = [
    "METRICS_CONTENT_TYPE",
    "EngineMetricsCollector",
    "generate_metrics",
    "get_metrics_collector",
    "reset_metrics_collector",
]
