"""Tax calculation request and breakdown schemas.

All monetary amounts are integers in minor currency units (cents).
"""

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, Field

from taxcore.models.tax_code import TaxCodeKind
from taxcore.models.tax_snapshot import RoundingMode, TaxSourceType


class TaxLineInput(BaseModel):
    id: str | None = Field(default=None, max_length=255)
    description: str | None = None
    qty: Decimal = Field(default=Decimal("1"), gt=0)
    net_amount_cents: int = Field(..., ge=0)
    tax_code_id: UUID | None = None


class CustomerTaxInfo(BaseModel):
    country: str = Field(..., min_length=2, max_length=2)
    is_business: bool = False
    vat_id: str | None = Field(default=None, max_length=50)


class CalculateTaxRequest(BaseModel):
    jurisdiction: str | None = Field(default=None, min_length=2, max_length=10)
    document_date: datetime
    currency: str | None = Field(default=None, min_length=3, max_length=3)
    customer: CustomerTaxInfo | None = None
    lines: list[TaxLineInput] = Field(..., min_length=1)


class LockTaxSnapshotRequest(CalculateTaxRequest):
    source_type: TaxSourceType
    source_id: str = Field(..., min_length=1, max_length=255)


class TaxLineResult(BaseModel):
    line_id: str | None = None
    tax_code_id: UUID | None = None
    kind: TaxCodeKind
    rate_bps: int
    net_amount_cents: int
    tax_amount_cents: int
    gross_amount_cents: int


class TaxKindTotals(BaseModel):
    net_amount_cents: int = 0
    tax_amount_cents: int = 0
    gross_amount_cents: int = 0
    rate_bps: int | None = None


class TaxBreakdownFlags(BaseModel):
    needs_reverse_charge_note: bool = False
    is_small_business_no_vat_charged: bool = False


class TaxBreakdown(BaseModel):
    subtotal_amount_cents: int
    tax_total_amount_cents: int
    total_amount_cents: int
    rounding_mode: RoundingMode
    lines: list[TaxLineResult]
    totals_by_kind: dict[TaxCodeKind, TaxKindTotals]
    flags: TaxBreakdownFlags


class CalculateTaxResponse(BaseModel):
    breakdown: TaxBreakdown
