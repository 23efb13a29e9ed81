"""Unit tests for DemandRepositoryStub and SystemTimeAuthority."""

from datetime import datetime, timedelta, timezone

import pytest

from alicerce.application.ports.demand_repository import (
    DemandPatchWriterProtocol,
    DemandReaderProtocol,
)
from alicerce.domain.models.demand import DemandStatus
from alicerce.domain.models.transition import DemandAction, DemandPatch
from alicerce.infrastructure.stubs.demand_repository_stub import DemandRepositoryStub
from alicerce.infrastructure.time_authority import SystemTimeAuthority
from tests.helpers.builders import make_demand


class TestDemandRepositoryStub:
    """Tests for the in-memory demand store."""

    def test_implements_ports(self) -> None:
        stub = DemandRepositoryStub()
        assert isinstance(stub, DemandReaderProtocol)
        assert isinstance(stub, DemandPatchWriterProtocol)

    def test_get_and_list(self) -> None:
        stub = DemandRepositoryStub([make_demand(1), make_demand(2)])

        assert stub.get_demand(2).id == 2
        assert stub.get_demand(3) is None
        assert [d.id for d in stub.list_demands()] == [1, 2]

    def test_apply_patch(self) -> None:
        stub = DemandRepositoryStub([make_demand(1)])
        patch = DemandPatch(
            demand_id=1,
            action=DemandAction.SUBMIT_FOR_REVIEW,
            status=DemandStatus.PENDING_WAREHOUSE_REVIEW,
        )

        updated = stub.apply(patch)

        assert updated.status is DemandStatus.PENDING_WAREHOUSE_REVIEW
        assert stub.get_demand(1) == updated
        assert stub.applied_patches == [patch]

    def test_apply_unknown_demand(self) -> None:
        patch = DemandPatch(
            demand_id=9,
            action=DemandAction.CANCEL,
            status=DemandStatus.CANCELLED,
            status_reason="x",
        )
        with pytest.raises(KeyError):
            DemandRepositoryStub().apply(patch)

    def test_clear(self) -> None:
        stub = DemandRepositoryStub([make_demand(1)])
        stub.clear()
        assert stub.list_demands() == []


class TestSystemTimeAuthority:
    """Tests for the system clock time authority."""

    def test_defaults_to_utc(self) -> None:
        now = SystemTimeAuthority().now()
        assert now.tzinfo == timezone.utc
        assert abs(now - datetime.now(timezone.utc)) < timedelta(seconds=5)

    def test_custom_zone(self) -> None:
        brasilia = timezone(timedelta(hours=-3))
        assert SystemTimeAuthority(brasilia).now().utcoffset() == timedelta(hours=-3)
