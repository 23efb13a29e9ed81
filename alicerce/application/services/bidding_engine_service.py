"""Bidding engine application service.

Single entry point of the engine for the calling layer (HTTP handlers,
batch jobs). It wires the pure domain services to the collaborators the
caller provides:

- TimeAuthorityProtocol for "now" (deadlines, closing kind, decision date)
- DemandReaderProtocol for historical demands (price benchmarks, standing)
- DemandPatchWriterProtocol for persisting accepted decisions (optional)

Procurement errors never escape as exceptions: decisions that can be
rejected return an EngineResult carrying either the value or the error.
"""

from __future__ import annotations

import time
from collections.abc import Sequence

from alicerce.application.dtos.engine_result import EngineResult
from alicerce.application.ports.demand_repository import (
    DemandPatchWriterProtocol,
    DemandReaderProtocol,
)
from alicerce.application.ports.time_authority import TimeAuthorityProtocol
from alicerce.application.services.base import LoggingMixin
from alicerce.config.engine_config import DEFAULT_ENGINE_CONFIG, EngineConfig
from alicerce.domain.errors.procurement import IntegrityError, ProcurementError
from alicerce.domain.models.bid_analysis import BidAnalysis
from alicerce.domain.models.deadlines import Deadlines
from alicerce.domain.models.demand import Award, Demand, ItemType, Priority, Proposal
from alicerce.domain.models.price_history import (
    ItemReference,
    PriceHistoryEntry,
    PriceHistorySummary,
)
from alicerce.domain.models.selection import AwardSelection
from alicerce.domain.models.transition import (
    DemandAction,
    DemandPatch,
    TransitionEvidence,
    allowed_actions,
)
from alicerce.domain.services.award_resolution import resolve_award, suggest_justification
from alicerce.domain.services.bid_ranking import analyze_bids
from alicerce.domain.services.deadline_rules import compute_deadlines
from alicerce.domain.services.demand_lifecycle import request_transition
from alicerce.domain.services.item_pricing import ItemPrice, resolve_item_prices
from alicerce.domain.services.price_history import price_history, summarize_price_history
from alicerce.domain.services.proposal_intake import validate_proposal_submission
from alicerce.domain.services.supplier_standing import SupplierStanding, supplier_standing
from alicerce.infrastructure.monitoring.metrics import (
    EngineMetricsCollector,
    get_metrics_collector,
)

ACCEPTED = "accepted"


class BiddingEngineService(LoggingMixin):
    """Facade over the deadline, lifecycle, ranking, award and history engines.

    Example:
        >>> engine = BiddingEngineService(time_authority=SystemTimeAuthority())
        >>> result = engine.request_transition(demand, DemandAction.APPROVE)
        >>> if result.ok:
        ...     store.apply(result.value)
    """

    def __init__(
        self,
        time_authority: TimeAuthorityProtocol,
        reader: DemandReaderProtocol | None = None,
        writer: DemandPatchWriterProtocol | None = None,
        config: EngineConfig = DEFAULT_ENGINE_CONFIG,
        metrics: EngineMetricsCollector | None = None,
    ) -> None:
        """Initialize the engine.

        Args:
            time_authority: Source of the current instant.
            reader: Read access to all demands. Without it, history-based
                features see an empty history unless demands are passed in.
            writer: Persists accepted patches in transition(). Optional;
                request_transition() never writes.
            config: Alias, history and currency settings.
            metrics: Metrics collector (defaults to the process singleton).
        """
        self._time = time_authority
        self._reader = reader
        self._writer = writer
        self._config = config
        self._metrics = metrics or get_metrics_collector()
        self._init_logger(component="bidding")

    @property
    def config(self) -> EngineConfig:
        return self._config

    def _history(self, demands: Sequence[Demand] | None) -> Sequence[Demand]:
        if demands is not None:
            return demands
        if self._reader is None:
            return ()
        return self._reader.list_demands()

    def _reject(self, operation: str, error: ProcurementError) -> None:
        self._metrics.record_rejection(operation, error.code)

    # =========================================================================
    # Deadlines
    # =========================================================================

    def compute_deadlines(self, item_type: ItemType, priority: Priority) -> Deadlines:
        """Deadlines a demand of this type and priority would get right now."""
        return compute_deadlines(item_type, priority, self._time.now())

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def request_transition(
        self,
        demand: Demand,
        action: DemandAction,
        evidence: TransitionEvidence | None = None,
    ) -> EngineResult[DemandPatch]:
        """Decide a lifecycle action without persisting it.

        Returns:
            EngineResult with the DemandPatch to persist, or the
            InvalidTransitionError / ValidationError / IntegrityError.
        """
        log = self._log_operation(
            "request_transition",
            demand_id=demand.id,
            action=action.value,
            status=demand.status.value,
        )
        try:
            patch = request_transition(demand, action, evidence, now=self._time.now())
        except ProcurementError as e:
            log.warning("transition_rejected", code=e.code, error=e.message)
            self._metrics.record_transition(action.value, e.code)
            self._reject("request_transition", e)
            return EngineResult.failure(e)

        self._metrics.record_transition(action.value, ACCEPTED)
        log.info("transition_accepted", to_status=patch.status.value)
        return EngineResult.success(patch)

    def transition(
        self,
        demand_id: int,
        action: DemandAction,
        evidence: TransitionEvidence | None = None,
    ) -> EngineResult[Demand]:
        """Load a demand, decide the action and persist the resulting patch.

        Requires both a reader and a writer.

        Returns:
            EngineResult with the updated snapshot returned by the writer.
        """
        if self._reader is None or self._writer is None:
            raise RuntimeError("transition() requires a demand reader and writer")

        demand = self._reader.get_demand(demand_id)
        if demand is None:
            error = IntegrityError(f"demand {demand_id}", f"Demand {demand_id} does not exist")
            self._reject("transition", error)
            return EngineResult.failure(error)

        decided = self.request_transition(demand, action, evidence)
        if decided.error is not None:
            return EngineResult.failure(decided.error)
        return EngineResult.success(self._writer.apply(decided.unwrap()))

    # =========================================================================
    # Bidding analysis and award
    # =========================================================================

    def analyze_bids(
        self,
        demand: Demand,
        history: Sequence[Demand] | None = None,
    ) -> BidAnalysis:
        """Anonymize and rank a demand's proposals.

        Args:
            demand: Demand whose proposals are analysed.
            history: Demands mined for historical benchmarks. Defaults to
                every demand known to the reader.
        """
        started = time.perf_counter()
        analysis = analyze_bids(
            demand,
            self._history(history),
            alias_prefix=self._config.alias_prefix,
            alias_width=self._config.alias_width,
        )
        self._metrics.observe_analysis(time.perf_counter() - started)
        self._log_operation("analyze_bids", demand_id=demand.id).debug(
            "analysis_completed",
            ranked=len(analysis.ranked_proposals),
        )
        return analysis

    def resolve_award(
        self,
        analysis: BidAnalysis,
        selection: AwardSelection,
        justification: str | None,
    ) -> EngineResult[Award]:
        """Resolve an operator selection into an Award."""
        log = self._log_operation("resolve_award", demand_id=analysis.demand_id)
        try:
            award = resolve_award(analysis, selection, justification)
        except ProcurementError as e:
            log.warning("award_rejected", code=e.code, error=e.message)
            self._reject("resolve_award", e)
            return EngineResult.failure(e)

        self._metrics.record_award(award.mode.value)
        log.info("award_resolved", mode=award.mode.value, winners=len(award.winner_names()))
        return EngineResult.success(award)

    def suggest_justification(
        self,
        analysis: BidAnalysis,
        selection: AwardSelection,
    ) -> str | None:
        return suggest_justification(analysis, selection, self._config.currency_symbol)

    def homologate(
        self,
        demand: Demand,
        selection: AwardSelection,
        justification: str | None,
        history: Sequence[Demand] | None = None,
    ) -> EngineResult[DemandPatch]:
        """Analyse, resolve the award and decide the HOMOLOGATE transition.

        The transition is checked first, so a demand that cannot be
        homologated is rejected before any selection is examined.
        """
        if DemandAction.HOMOLOGATE not in allowed_actions(demand.status):
            return self.request_transition(demand, DemandAction.HOMOLOGATE)

        analysis = self.analyze_bids(demand, history)
        resolved = self.resolve_award(analysis, selection, justification)
        if resolved.error is not None:
            return EngineResult.failure(resolved.error)
        return self.request_transition(
            demand,
            DemandAction.HOMOLOGATE,
            TransitionEvidence(award=resolved.unwrap()),
        )

    # =========================================================================
    # Proposals
    # =========================================================================

    def check_proposal(self, demand: Demand, proposal: Proposal) -> EngineResult[Proposal]:
        """Validate an incoming proposal against the demand's items."""
        try:
            validate_proposal_submission(demand, proposal)
        except ProcurementError as e:
            self._log_operation(
                "check_proposal", demand_id=demand.id, proposal_id=proposal.id
            ).warning("proposal_rejected", code=e.code, error=e.message)
            self._reject("check_proposal", e)
            return EngineResult.failure(e)
        return EngineResult.success(proposal)

    def item_prices(self, demand: Demand) -> dict[int, ItemPrice]:
        return resolve_item_prices(demand)

    # =========================================================================
    # History
    # =========================================================================

    def price_history(
        self,
        item_ref: ItemReference,
        demands: Sequence[Demand] | None = None,
    ) -> list[PriceHistoryEntry]:
        """Historically paid unit prices for an item, most recent first."""
        return price_history(item_ref, self._history(demands))

    def price_summary(
        self,
        item_ref: ItemReference,
        demands: Sequence[Demand] | None = None,
    ) -> PriceHistorySummary:
        return summarize_price_history(
            self.price_history(item_ref, demands),
            recent_window=self._config.recent_history_window,
        )

    def supplier_standing(
        self,
        supplier_name: str,
        demands: Sequence[Demand] | None = None,
    ) -> SupplierStanding:
        return supplier_standing(supplier_name, self._history(demands))

