"""Configuration module for the Alicerce engine.

Available Configurations:
- EngineConfig: Alias rendering and price benchmark tuning
"""

from alicerce.config.engine_config import (
    DEFAULT_ENGINE_CONFIG,
    TEST_ENGINE_CONFIG,
    EngineConfig,
)

__all__ = [
    "EngineConfig",
    "DEFAULT_ENGINE_CONFIG",
    "TEST_ENGINE_CONFIG",
]
