"""TaxSnapshot schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from taxcore.models.tax_profile import TaxRegime
from taxcore.models.tax_snapshot import RoundingMode, TaxSourceType


class TaxSnapshotResponse(BaseModel):
    """External representation of a snapshot; timestamps are ISO-8601 strings."""

    id: UUID
    tenant_id: str
    source_type: TaxSourceType
    source_id: str
    jurisdiction: str
    regime: TaxRegime
    rounding_mode: RoundingMode
    currency: str
    calculated_at: str
    subtotal_amount_cents: int
    tax_total_amount_cents: int
    total_amount_cents: int
    breakdown_json: str
    version: int
    created_at: str
    updated_at: str


class LockTaxSnapshotResponse(BaseModel):
    snapshot: TaxSnapshotResponse


class TaxSnapshotCreate(BaseModel):
    """Draft snapshot handed to the repository's insert-or-return-existing lock."""

    tenant_id: str
    source_type: TaxSourceType
    source_id: str
    jurisdiction: str
    regime: TaxRegime
    rounding_mode: RoundingMode
    currency: str
    calculated_at: datetime
    subtotal_amount_cents: int
    tax_total_amount_cents: int
    total_amount_cents: int
    breakdown_json: str
