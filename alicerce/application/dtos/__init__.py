"""Application-layer DTOs."""

from alicerce.application.dtos.engine_result import EngineResult

__all__ = ["EngineResult"]
