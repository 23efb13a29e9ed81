"""Prometheus metrics for the bidding engine.

Operational counters only: how many decisions were taken or rejected, by
kind. Business values (awarded totals, prices) are never exported as
metrics.
"""

import os
import threading

from prometheus_client import (
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
)

# Content type for Prometheus metrics endpoint
METRICS_CONTENT_TYPE = "text/plain; version=0.0.4; charset=utf-8"

# Thread lock for singleton initialization
_collector_lock = threading.Lock()

# Analysis runs are in-memory; buckets from 1ms to 1s
ANALYSIS_DURATION_BUCKETS = (0.001, 0.0025, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0)


class EngineMetricsCollector:
    """Collects and manages engine Prometheus metrics.

    Attributes:
        transitions_total: Counter of lifecycle decisions by action/outcome.
        awards_resolved_total: Counter of resolved awards by mode.
        rejections_total: Counter of rejected operations by error code.
        bid_analyses_total: Counter of bid analyses performed.
        bid_analysis_duration_seconds: Histogram of analysis durations.
    """

    def __init__(self, registry: CollectorRegistry | None = None) -> None:
        """Initialize metrics collector.

        Args:
            registry: Optional custom registry for testing isolation.
        """
        self._registry = registry or CollectorRegistry()
        self._environment = os.environ.get("ENVIRONMENT", "development")
        self._service_name = os.environ.get("SERVICE_NAME", "alicerce-engine")

        self.transitions_total = Counter(
            name="alicerce_transitions_total",
            documentation="Lifecycle transition decisions",
            labelnames=["service", "environment", "action", "outcome"],
            registry=self._registry,
        )
        self.awards_resolved_total = Counter(
            name="alicerce_awards_resolved_total",
            documentation="Awards resolved from operator selections",
            labelnames=["service", "environment", "mode"],
            registry=self._registry,
        )
        self.rejections_total = Counter(
            name="alicerce_rejections_total",
            documentation="Engine operations rejected with an error value",
            labelnames=["service", "environment", "operation", "code"],
            registry=self._registry,
        )
        self.bid_analyses_total = Counter(
            name="alicerce_bid_analyses_total",
            documentation="Bid analyses performed",
            labelnames=["service", "environment"],
            registry=self._registry,
        )
        self.bid_analysis_duration_seconds = Histogram(
            name="alicerce_bid_analysis_duration_seconds",
            documentation="Bid analysis duration in seconds",
            labelnames=["service", "environment"],
            buckets=ANALYSIS_DURATION_BUCKETS,
            registry=self._registry,
        )

    def _labels(self) -> dict[str, str]:
        return {"service": self._service_name, "environment": self._environment}

    def record_transition(self, action: str, outcome: str) -> None:
        """Count a lifecycle decision.

        Args:
            action: DemandAction value.
            outcome: "accepted" or the rejecting error code.
        """
        self.transitions_total.labels(
            **self._labels(), action=action, outcome=outcome
        ).inc()

    def record_award(self, mode: str) -> None:
        self.awards_resolved_total.labels(**self._labels(), mode=mode).inc()

    def record_rejection(self, operation: str, code: str) -> None:
        self.rejections_total.labels(
            **self._labels(), operation=operation, code=code
        ).inc()

    def observe_analysis(self, duration: float) -> None:
        """Record one bid analysis and its duration in seconds."""
        labels = self._labels()
        self.bid_analyses_total.labels(**labels).inc()
        self.bid_analysis_duration_seconds.labels(**labels).observe(duration)

    def get_registry(self) -> CollectorRegistry:
        return self._registry


# Singleton instance
_metrics_collector: EngineMetricsCollector | None = None


def get_metrics_collector() -> EngineMetricsCollector:
    """Get the singleton EngineMetricsCollector instance (thread-safe)."""
    global _metrics_collector
    if _metrics_collector is None:
        with _collector_lock:
            # Double-check inside lock
            if _metrics_collector is None:
                _metrics_collector = EngineMetricsCollector()
    return _metrics_collector


def generate_metrics() -> bytes:
    """Generate Prometheus metrics in exposition format."""
    return generate_latest(get_metrics_collector().get_registry())


def reset_metrics_collector() -> None:
    """Reset the singleton collector (for testing only)."""
    global _metrics_collector
    with _collector_lock:
        _metrics_collector = None
