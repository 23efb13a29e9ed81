"""Unit tests for engine Prometheus metrics.

Only operational counts are exported; awarded values and prices never
appear in the exposition output.
"""

import pytest
from prometheus_client import CollectorRegistry, generate_latest

from alicerce.infrastructure.monitoring.metrics import (
    EngineMetricsCollector,
    generate_metrics,
    get_metrics_collector,
    reset_metrics_collector,
)


@pytest.fixture(autouse=True)
def _plain_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("ENVIRONMENT", raising=False)
    monkeypatch.delenv("SERVICE_NAME", raising=False)


@pytest.fixture
def collector() -> EngineMetricsCollector:
    return EngineMetricsCollector(registry=CollectorRegistry())


def _labels(**extra: str) -> dict[str, str]:
    return {"service": "alicerce-engine", "environment": "development", **extra}


class TestEngineMetricsCollector:
    """Tests for EngineMetricsCollector."""

    def test_initialization(self, collector: EngineMetricsCollector) -> None:
        assert collector.transitions_total is not None
        assert collector.awards_resolved_total is not None
        assert collector.rejections_total is not None
        assert collector.bid_analyses_total is not None
        assert collector.bid_analysis_duration_seconds is not None

    def test_record_transition(self, collector: EngineMetricsCollector) -> None:
        collector.record_transition("approve", "accepted")
        collector.record_transition("approve", "accepted")
        collector.record_transition("approve", "validation_error")

        registry = collector.get_registry()
        assert registry.get_sample_value(
            "alicerce_transitions_total", _labels(action="approve", outcome="accepted")
        ) == 2.0
        assert registry.get_sample_value(
            "alicerce_transitions_total",
            _labels(action="approve", outcome="validation_error"),
        ) == 1.0

    def test_record_award_and_rejection(self, collector: EngineMetricsCollector) -> None:
        collector.record_award("global")
        collector.record_rejection("resolve_award", "integrity_error")

        registry = collector.get_registry()
        assert registry.get_sample_value(
            "alicerce_awards_resolved_total", _labels(mode="global")
        ) == 1.0
        assert registry.get_sample_value(
            "alicerce_rejections_total",
            _labels(operation="resolve_award", code="integrity_error"),
        ) == 1.0

    def test_observe_analysis(self, collector: EngineMetricsCollector) -> None:
        collector.observe_analysis(0.004)

        registry = collector.get_registry()
        assert registry.get_sample_value("alicerce_bid_analyses_total", _labels()) == 1.0
        assert registry.get_sample_value(
            "alicerce_bid_analysis_duration_seconds_count", _labels()
        ) == 1.0

    def test_environment_label(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ENVIRONMENT", "production")
        collector = EngineMetricsCollector(registry=CollectorRegistry())
        collector.record_award("item")

        output = generate_latest(collector.get_registry()).decode("utf-8")
        assert 'environment="production"' in output

    def test_no_business_values_exported(self, collector: EngineMetricsCollector) -> None:
        collector.record_award("global")
        output = generate_latest(collector.get_registry()).decode("utf-8")
        assert "total_value" not in output
        assert "price" not in output


class TestMetricsSingleton:
    """Tests for the process-wide collector."""

    def test_singleton_is_reused(self) -> None:
        reset_metrics_collector()
        try:
            assert get_metrics_collector() is get_metrics_collector()
        finally:
            reset_metrics_collector()

    def test_generate_metrics(self) -> None:
        reset_metrics_collector()
        try:
            get_metrics_collector().record_transition("cancel", "accepted")
            output = generate_metrics().decode("utf-8")
            assert "alicerce_transitions_total" in output
        finally:
            reset_metrics_collector()
