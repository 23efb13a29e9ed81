"""
Pytest configuration and shared fixtures for Alicerce engine tests.

Testing Standards:
- Unit tests go in tests/unit/, grouped by layer
- Time-dependent tests use FakeTimeAuthority, never the system clock
- Metrics tests use an isolated CollectorRegistry
"""

import pytest
from prometheus_client import CollectorRegistry

from alicerce.config.engine_config import TEST_ENGINE_CONFIG, EngineConfig
from alicerce.infrastructure.monitoring.metrics import EngineMetricsCollector
from tests.helpers.fake_time_authority import FakeTimeAuthority


@pytest.fixture
def project_version() -> str:
    """Provide the current project version for tests."""
    from alicerce import __version__

    return __version__


@pytest.fixture
def fake_time_authority() -> FakeTimeAuthority:
    """Time authority frozen on Monday 2024-03-04 09:00 UTC."""
    return FakeTimeAuthority()


@pytest.fixture
def metrics_registry() -> CollectorRegistry:
    return CollectorRegistry()


@pytest.fixture
def metrics_collector(metrics_registry: CollectorRegistry) -> EngineMetricsCollector:
    """Metrics collector bound to an isolated registry."""
    return EngineMetricsCollector(registry=metrics_registry)


@pytest.fixture
def engine_config() -> EngineConfig:
    return TEST_ENGINE_CONFIG
