"""Application services."""

from alicerce.application.services.base import LoggingMixin
from alicerce.application.services.bidding_engine_service import BiddingEngineService

__all__ = ["BiddingEngineService", "LoggingMixin"]
