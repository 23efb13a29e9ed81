"""Bidding engine configuration.

This module defines presentation and benchmarking knobs of the engine with
environment variable overrides. Business rules (deadline matrix, lifecycle)
are not configurable.

Environment Variables:
- ALICERCE_ALIAS_PREFIX: Prefix of bidder aliases (default: "Bidder")
- ALICERCE_ALIAS_WIDTH: Zero-padding width of alias numbers (default: 2)
- ALICERCE_RECENT_HISTORY_WINDOW: Entries in the recent price average (default: 3)
- ALICERCE_CURRENCY_SYMBOL: Currency symbol used in justifications (default: "R$")
"""

from __future__ import annotations

import os
from dataclasses import dataclass


def _get_int_env(key: str, default: int) -> int:
    """Get integer environment variable with default.

    Args:
        key: Environment variable name.
        default: Default value if not set or invalid.

    Returns:
        Parsed integer value or default.
    """
    value = os.environ.get(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _get_str_env(key: str, default: str) -> str:
    value = os.environ.get(key)
    if value is None or not value.strip():
        return default
    return value.strip()


@dataclass(frozen=True)
class EngineConfig:
    """Configuration for the bidding engine.

    Attributes:
        alias_prefix: Prefix of bidder aliases shown during the blind phase.
        alias_width: Zero-padding width of alias numbers ("01", "02", ...).
        recent_history_window: Number of most recent prices averaged as the
            recent benchmark.
        currency_symbol: Symbol used when rendering amounts in suggested
            justifications.
    """

    alias_prefix: str = "Bidder"
    alias_width: int = 2
    recent_history_window: int = 3
    currency_symbol: str = "R$"

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if not self.alias_prefix.strip():
            raise ValueError("alias_prefix must not be empty")
        if self.alias_width < 1:
            raise ValueError(f"alias_width must be positive, got {self.alias_width}")
        if self.recent_history_window < 1:
            raise ValueError(
                "recent_history_window must be positive, "
                f"got {self.recent_history_window}"
            )

    @classmethod
    def from_environment(cls) -> EngineConfig:
        """Create config from environment variables with defaults.

        Returns:
            EngineConfig with values from environment or defaults.
        """
        return cls(
            alias_prefix=_get_str_env("ALICERCE_ALIAS_PREFIX", "Bidder"),
            alias_width=_get_int_env("ALICERCE_ALIAS_WIDTH", 2),
            recent_history_window=_get_int_env("ALICERCE_RECENT_HISTORY_WINDOW", 3),
            currency_symbol=_get_str_env("ALICERCE_CURRENCY_SYMBOL", "R$"),
        )


# Default production config
DEFAULT_ENGINE_CONFIG = EngineConfig()

# Testing config, identical business output with a shorter history window
TEST_ENGINE_CONFIG = EngineConfig(recent_history_window=2)
