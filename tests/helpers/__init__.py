"""Test helpers for Alicerce engine tests.

Helpers:
    FakeTimeAuthority: Controllable time authority for deterministic tests
    builders: Factories for demands, items and proposals

Usage:
    from tests.helpers import FakeTimeAuthority
    from tests.helpers.builders import make_demand, make_proposal
"""

from tests.helpers.fake_time_authority import FakeTimeAuthority

__all__ = ["FakeTimeAuthority"]
