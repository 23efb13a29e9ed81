"""Demand record ingestion.

Pydantic models for demand records as they come out of the demand store,
and their one-time conversion into domain models. Store records carry
camelCase or snake_case keys, Portuguese enum labels, a free-text
"DECLINED" marker instead of a decline flag, and (for older records)
awards without an explicit mode. All of that is normalized here, once,
so the engine only ever sees tagged variants.

Usage:
    demand = ingest_demand(raw_row)
    demands = ingest_demands(raw_rows)
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from datetime import datetime
from decimal import Decimal
from typing import Any

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    ValidationInfo,
    field_validator,
    model_validator,
)

from alicerce.domain.models.demand import (
    Award,
    AwardItem,
    AwardMode,
    Demand,
    DemandStatus,
    Item,
    ItemType,
    LineDeclined,
    Priority,
    Proposal,
    ProposalItem,
    ProposalStanding,
    Quoted,
)

DECLINED_MARKER = "DECLINED"

STATUS_LABELS: dict[str, DemandStatus] = {
    "Rascunho": DemandStatus.DRAFT,
    "Aguardando Análise Almoxarifado": DemandStatus.PENDING_WAREHOUSE_REVIEW,
    "Em Cotação": DemandStatus.OPEN_FOR_BIDDING,
    "Em Análise": DemandStatus.UNDER_ANALYSIS,
    "Vencedor Definido": DemandStatus.AWARD_DEFINED,
    "Concluída": DemandStatus.COMPLETED,
    "Fechada": DemandStatus.CLOSED,
    "Reprovada": DemandStatus.REJECTED,
    "Cancelada": DemandStatus.CANCELLED,
}

ITEM_TYPE_LABELS: dict[str, ItemType] = {
    "Materiais": ItemType.MATERIALS,
    "Material": ItemType.MATERIALS,
    "Serviços": ItemType.SERVICES,
    "Serviço": ItemType.SERVICES,
}

PRIORITY_LABELS: dict[str, Priority] = {
    "Baixa": Priority.LOW,
    "Média": Priority.MEDIUM,
    "Normal": Priority.MEDIUM,
    "Urgente": Priority.URGENT,
}


def _has_decline_marker(observations: str | None) -> bool:
    return bool(observations) and DECLINED_MARKER in (observations or "")


def _label_lookup(value: Any, labels: Mapping[str, Any], enum_type: type) -> Any:
    if isinstance(value, enum_type):
        return value
    if isinstance(value, str):
        if value in labels:
            return labels[value]
        return enum_type(value)
    return value


class _Record(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)


class ItemRecord(_Record):
    """A demand item row."""

    id: int
    description: str
    unit: str = ""
    quantity: int = Field(..., ge=1)
    group_id: str = Field("", validation_alias=AliasChoices("group_id", "groupId"))
    catalog_item_id: str | None = Field(
        None, validation_alias=AliasChoices("catalog_item_id", "catalogItemId")
    )

    def to_domain(self) -> Item:
        return Item(
            id=self.id,
            description=self.description,
            unit=self.unit,
            quantity=self.quantity,
            group_id=self.group_id or "",
            catalog_item_id=self.catalog_item_id or None,
        )


class ProposalItemRecord(_Record):
    """A proposal line row.

    A line is declined when flagged, when it carries the decline marker,
    or when it has no price at all.
    """

    item_id: int = Field(..., validation_alias=AliasChoices("itemId", "item_id"))
    unit_price: Decimal | None = Field(
        None, validation_alias=AliasChoices("unitPrice", "unit_price")
    )
    brand: str | None = None
    observations: str | None = None
    declined: bool = False

    def to_domain(self) -> ProposalItem:
        if self.declined or self.unit_price is None or _has_decline_marker(self.observations):
            quote: Quoted | LineDeclined = LineDeclined()
        else:
            quote = Quoted(unit_price=self.unit_price)
        return ProposalItem(item_id=self.item_id, quote=quote, brand=self.brand or None)


class ProposalRecord(_Record):
    """A proposal row. Whole declines are marked in observations."""

    id: int
    protocol: str = ""
    supplier_id: int = Field(..., validation_alias=AliasChoices("supplierId", "supplier_id"))
    supplier_name: str = Field(
        ..., validation_alias=AliasChoices("supplierName", "supplier_name")
    )
    delivery_time: str = Field(
        "", validation_alias=AliasChoices("deliveryTime", "delivery_time")
    )
    submitted_at: datetime = Field(
        ..., validation_alias=AliasChoices("submittedAt", "submitted_at")
    )
    items: list[ProposalItemRecord] = Field(default_factory=list)
    observations: str | None = None

    def to_domain(self, sequence: int) -> Proposal:
        standing = (
            ProposalStanding.DECLINED
            if _has_decline_marker(self.observations)
            else ProposalStanding.ACTIVE
        )
        return Proposal(
            id=self.id,
            sequence=sequence,
            protocol=self.protocol,
            supplier_id=self.supplier_id,
            supplier_name=self.supplier_name,
            submitted_at=self.submitted_at,
            delivery_time=self.delivery_time or "",
            items=tuple(line.to_domain() for line in self.items),
            observations=self.observations,
            standing=standing,
        )


class WinnerItemRecord(_Record):
    """Per-item winner row of an item-mode award."""

    item_id: int = Field(..., validation_alias=AliasChoices("itemId", "item_id"))
    supplier_name: str = Field(
        ..., validation_alias=AliasChoices("supplierName", "supplier_name")
    )
    unit_price: Decimal = Field(
        ..., validation_alias=AliasChoices("unitPrice", "unit_price")
    )
    quantity: int
    total_value: Decimal = Field(
        ..., validation_alias=AliasChoices("totalValue", "total_value")
    )


class WinnerRecord(_Record):
    """Award row. Older rows have no mode; it is inferred from items."""

    mode: AwardMode | None = None
    supplier_name: str | None = Field(
        None, validation_alias=AliasChoices("supplierName", "supplier_name")
    )
    total_value: Decimal = Field(
        Decimal("0"), validation_alias=AliasChoices("totalValue", "total_value")
    )
    justification: str | None = None
    items: list[WinnerItemRecord] | None = None

    @model_validator(mode="after")
    def _check_shape(self) -> WinnerRecord:
        if self.resolved_mode() is AwardMode.GLOBAL and not self.supplier_name:
            raise ValueError("global winner requires a supplier name")
        return self

    def resolved_mode(self) -> AwardMode:
        if self.mode is not None:
            return self.mode
        return AwardMode.ITEM if self.items else AwardMode.GLOBAL

    def to_domain(self) -> Award:
        mode = self.resolved_mode()
        justification = self.justification or ""
        if mode is AwardMode.GLOBAL:
            return Award(
                mode=mode,
                justification=justification,
                total_value=self.total_value,
                supplier_name=self.supplier_name,
            )
        award_items = tuple(
            AwardItem(
                item_id=w.item_id,
                supplier_name=w.supplier_name,
                unit_price=w.unit_price,
                quantity=w.quantity,
                total_value=w.total_value,
            )
            for w in self.items or []
        )
        total = self.total_value or sum((ai.total_value for ai in award_items), Decimal("0"))
        return Award(
            mode=mode,
            justification=justification,
            total_value=total,
            items=award_items,
        )


class DemandRecord(_Record):
    """A demand row with nested items, proposals and winner."""

    id: int
    protocol: str
    title: str = ""
    requesting_department: str = Field(
        "", validation_alias=AliasChoices("requestingDepartment", "requesting_department")
    )
    item_type: ItemType = Field(..., validation_alias=AliasChoices("type", "item_type"))
    priority: Priority
    description: str = Field(
        "",
        validation_alias=AliasChoices("requestDescription", "request_description", "description"),
    )
    items: list[ItemRecord] = Field(default_factory=list)
    status: DemandStatus
    proposals: list[ProposalRecord] = Field(default_factory=list)
    winner: WinnerRecord | None = None
    proposal_deadline: datetime | None = Field(
        None, validation_alias=AliasChoices("proposalDeadline", "proposal_deadline")
    )
    delivery_deadline: datetime | None = Field(
        None,
        validation_alias=AliasChoices("deadline", "deliveryDeadline", "delivery_deadline"),
        validate_default=True,
    )
    created_at: datetime = Field(..., validation_alias=AliasChoices("createdAt", "created_at"))
    decision_date: datetime | None = Field(
        None, validation_alias=AliasChoices("decisionDate", "decision_date")
    )
    rejection_reason: str | None = Field(
        None, validation_alias=AliasChoices("rejectionReason", "rejection_reason")
    )
    approval_observations: str | None = Field(
        None, validation_alias=AliasChoices("approvalObservations", "approval_observations")
    )

    @field_validator("status", mode="before")
    @classmethod
    def _parse_status(cls, value: Any) -> Any:
        return _label_lookup(value, STATUS_LABELS, DemandStatus)

    @field_validator("item_type", mode="before")
    @classmethod
    def _parse_item_type(cls, value: Any) -> Any:
        return _label_lookup(value, ITEM_TYPE_LABELS, ItemType)

    @field_validator("priority", mode="before")
    @classmethod
    def _parse_priority(cls, value: Any) -> Any:
        return _label_lookup(value, PRIORITY_LABELS, Priority)

    @field_validator("proposal_deadline", "delivery_deadline", "decision_date", mode="before")
    @classmethod
    def _blank_to_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("delivery_deadline")
    @classmethod
    def _default_to_proposal_deadline(
        cls, value: datetime | None, info: ValidationInfo
    ) -> datetime | None:
        # Older rows only stored the proposal deadline.
        if value is None:
            return info.data.get("proposal_deadline")
        return value

    def to_domain(self) -> Demand:
        """Convert into a Demand.

        Proposal sequences follow ascending proposal id, the order in
        which the store assigned them.

        Raises:
            ValueError: If the record breaks a demand invariant.
        """
        ordered = sorted(self.proposals, key=lambda p: p.id)
        return Demand(
            id=self.id,
            protocol=self.protocol,
            title=self.title,
            requesting_department=self.requesting_department,
            item_type=self.item_type,
            priority=self.priority,
            description=self.description,
            created_at=self.created_at,
            items=tuple(item.to_domain() for item in self.items),
            status=self.status,
            proposals=tuple(
                record.to_domain(sequence=position)
                for position, record in enumerate(ordered, start=1)
            ),
            award=self.winner.to_domain() if self.winner is not None else None,
            proposal_deadline=self.proposal_deadline,
            delivery_deadline=self.delivery_deadline,
            decision_date=self.decision_date,
            rejection_reason=self.rejection_reason,
            approval_observations=self.approval_observations,
        )


def ingest_demand(raw: Mapping[str, Any]) -> Demand:
    """Validate and normalize one demand row.

    Raises:
        pydantic.ValidationError: If the row is malformed.
        ValueError: If the row breaks a demand invariant.
    """
    return DemandRecord.model_validate(raw).to_domain()


def ingest_demands(rows: Iterable[Mapping[str, Any]]) -> list[Demand]:
    return [ingest_demand(row) for row in rows]
