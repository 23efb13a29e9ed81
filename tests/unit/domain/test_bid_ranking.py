"""Unit tests for blind-bidding anonymization and ranking."""

from datetime import datetime, timezone
from decimal import Decimal

from hypothesis import given
from hypothesis import strategies as st

from alicerce.domain.models.demand import (
    Award,
    AwardMode,
    DemandStatus,
)
from alicerce.domain.services.bid_ranking import (
    analyze_bids,
    calculate_total,
    compute_economicity,
    format_alias,
)
from tests.helpers.builders import make_demand, make_item, make_proposal


def _three_bidders():
    """Bidders A, B and C submit totals of 1200, 900 and 1000."""
    items = (make_item(1, quantity=10),)
    return make_demand(
        status=DemandStatus.UNDER_ANALYSIS,
        items=items,
        proposals=(
            make_proposal(101, 1, "Alpha Ltda", {1: "120.00"}),
            make_proposal(102, 2, "Beta SA", {1: "90.00"}),
            make_proposal(103, 3, "Gamma ME", {1: "100.00"}),
        ),
    )


class TestFormatAlias:
    """Tests for alias rendering."""

    def test_zero_padded(self) -> None:
        assert format_alias(1) == "Bidder 01"
        assert format_alias(12) == "Bidder 12"

    def test_custom_prefix_and_width(self) -> None:
        assert format_alias(3, prefix="Proponente", width=3) == "Proponente 003"


class TestCalculateTotal:
    """Tests for calculate_total."""

    def test_sums_quantity_times_price(self) -> None:
        items = (make_item(1, quantity=10), make_item(2, quantity=3))
        proposal = make_proposal(1, 1, "Acme", {1: "2.50", 2: "10.00"})

        assert calculate_total(proposal, items) == Decimal("55.00")

    def test_declined_and_missing_lines_add_nothing(self) -> None:
        items = (make_item(1, quantity=10), make_item(2, quantity=3), make_item(3))
        proposal = make_proposal(1, 1, "Acme", {1: "2.50", 2: None})

        assert calculate_total(proposal, items) == Decimal("25.00")

    def test_lines_outside_demand_are_ignored(self) -> None:
        proposal = make_proposal(1, 1, "Acme", {1: "1.00", 99: "1000.00"})
        assert calculate_total(proposal, (make_item(1),)) == Decimal("1.00")


class TestAnalyzeBids:
    """Tests for analyze_bids ranking and aliasing."""

    def test_ranked_ascending_by_total(self) -> None:
        analysis = analyze_bids(_three_bidders())

        assert [a.alias for a in analysis.ranked_proposals] == [
            "Bidder 02",
            "Bidder 03",
            "Bidder 01",
        ]
        assert [a.calculated_total for a in analysis.ranked_proposals] == [
            Decimal("900.00"),
            Decimal("1000.00"),
            Decimal("1200.00"),
        ]

    def test_economicity_compares_lowest_to_highest(self) -> None:
        analysis = analyze_bids(_three_bidders())

        assert analysis.economicity is not None
        assert analysis.economicity.diff == Decimal("300.00")
        assert analysis.economicity.percent == Decimal("25")

    def test_aliases_follow_submission_sequence_not_price(self) -> None:
        analysis = analyze_bids(_three_bidders())

        assert [a.alias for a in analysis.aliased_proposals] == [
            "Bidder 01",
            "Bidder 02",
            "Bidder 03",
        ]
        assert analysis.aliased_proposals[0].supplier_name == "Alpha Ltda"

    def test_declined_proposals_are_excluded(self) -> None:
        demand = make_demand(
            status=DemandStatus.UNDER_ANALYSIS,
            items=(make_item(1),),
            proposals=(
                make_proposal(1, 1, "Acme", {1: None}, declined=True),
                make_proposal(2, 2, "Beta", {1: "5.00"}),
            ),
        )
        analysis = analyze_bids(demand)

        assert len(analysis.ranked_proposals) == 1
        # The declined bidder does not consume an alias
        assert analysis.ranked_proposals[0].alias == "Bidder 01"
        assert analysis.economicity is None

    def test_ties_keep_submission_order(self) -> None:
        demand = make_demand(
            status=DemandStatus.UNDER_ANALYSIS,
            items=(make_item(1),),
            proposals=(
                make_proposal(7, 2, "Late", {1: "5.00"}),
                make_proposal(3, 1, "Early", {1: "5.00"}),
            ),
        )
        analysis = analyze_bids(demand)

        assert [a.supplier_name for a in analysis.ranked_proposals] == ["Early", "Late"]

    def test_per_item_decline_is_not_lowest(self) -> None:
        """A declined line never counts as the lowest quote."""
        demand = make_demand(
            status=DemandStatus.UNDER_ANALYSIS,
            items=(make_item(1, quantity=2),),
            proposals=(
                make_proposal(1, 1, "Acme", {1: "10.00"}),
                make_proposal(2, 2, "Beta", {1: None}),
                make_proposal(3, 3, "Gamma", {1: "12.00"}),
            ),
        )
        comparison = analyze_bids(demand).comparison_for(1)

        assert comparison is not None
        assert comparison.lowest_unit_price == Decimal("10.00")
        assert [q.supplier_name for q in comparison.quotes] == ["Acme", "Gamma"]
        assert [q.is_lowest for q in comparison.quotes] == [True, False]
        assert comparison.best_total == Decimal("20.00")

    def test_potential_mixed_total_uses_best_price_per_item(self) -> None:
        demand = make_demand(
            status=DemandStatus.UNDER_ANALYSIS,
            items=(make_item(1, quantity=2), make_item(2, quantity=1)),
            proposals=(
                make_proposal(1, 1, "Acme", {1: "10.00", 2: "8.00"}),
                make_proposal(2, 2, "Beta", {1: "12.00", 2: "5.00"}),
            ),
        )
        analysis = analyze_bids(demand)

        assert analysis.potential_mixed_total == Decimal("25.00")

    def test_historical_total_uses_last_paid_prices(self) -> None:
        history = make_demand(
            demand_id=50,
            status=DemandStatus.COMPLETED,
            items=(make_item(1, description="A4 paper", quantity=1),),
            proposals=(make_proposal(9, 1, "Old Co", {1: "8.00"}),),
            award=Award(
                mode=AwardMode.GLOBAL,
                justification="ok",
                total_value=Decimal("8.00"),
                supplier_name="Old Co",
            ),
            decision_date=datetime(2024, 1, 10, tzinfo=timezone.utc),
        )
        demand = make_demand(
            status=DemandStatus.UNDER_ANALYSIS,
            items=(make_item(1, description="a4 PAPER", quantity=10),),
            proposals=(make_proposal(1, 1, "Acme", {1: "9.00"}),),
        )
        analysis = analyze_bids(demand, history_demands=[history, demand])

        assert analysis.ranked_proposals[0].historical_total == Decimal("80.00")

    def test_historical_total_covers_declined_items(self) -> None:
        """Items a proposal declines still count in its historical benchmark."""
        history = make_demand(
            demand_id=50,
            status=DemandStatus.COMPLETED,
            items=(
                make_item(1, description="Toner", quantity=1),
                make_item(2, description="Stapler", quantity=1),
            ),
            proposals=(make_proposal(9, 1, "Old Co", {1: "8.00", 2: "5.00"}),),
            award=Award(
                mode=AwardMode.GLOBAL,
                justification="ok",
                total_value=Decimal("13.00"),
                supplier_name="Old Co",
            ),
            decision_date=datetime(2024, 1, 10, tzinfo=timezone.utc),
        )
        demand = make_demand(
            status=DemandStatus.UNDER_ANALYSIS,
            items=(
                make_item(1, description="Toner", quantity=10),
                make_item(2, description="Stapler", quantity=10),
            ),
            proposals=(
                make_proposal(1, 1, "Acme", {1: "9.00", 2: None}),
                make_proposal(2, 2, "Beta", {1: "7.50", 2: "4.00"}),
            ),
        )
        analysis = analyze_bids(demand, history_demands=[history])
        by_supplier = {a.supplier_name: a for a in analysis.ranked_proposals}

        assert by_supplier["Acme"].calculated_total == Decimal("90.00")
        assert by_supplier["Acme"].historical_total == Decimal("130.00")
        assert by_supplier["Beta"].historical_total == Decimal("130.00")

    def test_analysis_is_deterministic(self) -> None:
        assert analyze_bids(_three_bidders()) == analyze_bids(_three_bidders())

    @given(
        prices=st.lists(
            st.decimals(min_value=0, max_value=10_000, places=2),
            min_size=1,
            max_size=8,
        )
    )
    def test_ranking_is_sorted_and_complete(self, prices: list[Decimal]) -> None:
        demand = make_demand(
            status=DemandStatus.UNDER_ANALYSIS,
            items=(make_item(1, quantity=3),),
            proposals=tuple(
                make_proposal(i + 1, i + 1, f"Supplier {i}", {1: price})
                for i, price in enumerate(prices)
            ),
        )
        ranked = analyze_bids(demand).ranked_proposals
        totals = [a.calculated_total for a in ranked]

        assert totals == sorted(totals)
        assert len(ranked) == len(prices)
        assert len({a.alias for a in ranked}) == len(prices)


class TestComputeEconomicity:
    """Tests for compute_economicity edge cases."""

    def test_undefined_for_single_bid(self) -> None:
        analysis = analyze_bids(
            make_demand(
                status=DemandStatus.UNDER_ANALYSIS,
                items=(make_item(1),),
                proposals=(make_proposal(1, 1, "Acme", {1: "5"}),),
            )
        )
        assert compute_economicity(analysis.ranked_proposals) is None

    def test_undefined_when_highest_is_zero(self) -> None:
        analysis = analyze_bids(
            make_demand(
                status=DemandStatus.UNDER_ANALYSIS,
                items=(make_item(1),),
                proposals=(
                    make_proposal(1, 1, "Acme", {1: "0"}),
                    make_proposal(2, 2, "Beta", {1: "0"}),
                ),
            )
        )
        assert analysis.economicity is None
