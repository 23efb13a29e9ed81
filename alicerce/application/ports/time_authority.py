"""Time Authority Protocol - interface for consistent timestamp provisioning.

Services that need "now" (deadline computation, closing-kind tagging,
decision dates) inject a TimeAuthorityProtocol implementation instead of
calling datetime.now() directly, so tests can freeze time.
"""

from abc import ABC, abstractmethod
from datetime import datetime


class TimeAuthorityProtocol(ABC):
    """Abstract interface for time authority.

    For production:
        Use SystemTimeAuthority from alicerce.infrastructure.time_authority

    For testing:
        Use FakeTimeAuthority from tests/helpers/fake_time_authority.py
    """

    @abstractmethod
    def now(self) -> datetime:
        """Return the current time with timezone awareness."""
