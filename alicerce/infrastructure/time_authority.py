"""System clock implementation of the time authority port."""

from datetime import datetime, timezone, tzinfo

from alicerce.application.ports.time_authority import TimeAuthorityProtocol


class SystemTimeAuthority(TimeAuthorityProtocol):
    """Time authority backed by the system clock, optionally in a fixed zone.

    Deadlines are computed on the date of "now" in this zone, so municipal
    deployments should pass their local zone.
    """

    def __init__(self, tz: tzinfo | None = None) -> None:
        self._tz = tz or timezone.utc

    def now(self) -> datetime:
        return datetime.now(self._tz)
