"""Adapters between external demand records and domain models."""

from alicerce.infrastructure.adapters.demand_records import (
    DemandRecord,
    ingest_demand,
    ingest_demands,
)

__all__ = ["DemandRecord", "ingest_demand", "ingest_demands"]
