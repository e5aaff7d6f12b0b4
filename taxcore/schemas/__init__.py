from taxcore.schemas.tax_calculation import (
    CalculateTaxRequest,
    CalculateTaxResponse,
    CustomerTaxInfo,
    LockTaxSnapshotRequest,
    TaxBreakdown,
    TaxBreakdownFlags,
    TaxKindTotals,
    TaxLineInput,
    TaxLineResult,
)
from taxcore.schemas.tax_code import (
    TaxCodeCreate,
    TaxCodeResponse,
    TaxCodeUpdate,
    TaxRateCreate,
    TaxRateResponse,
    TaxRateUpdate,
)
from taxcore.schemas.tax_profile import (
    ActiveTaxProfileResponse,
    TaxProfileResponse,
    TaxProfileUpsert,
)
from taxcore.schemas.tax_snapshot import (
    LockTaxSnapshotResponse,
    TaxSnapshotCreate,
    TaxSnapshotResponse,
)

__all__ = [
    "ActiveTaxProfileResponse",
    "CalculateTaxRequest",
    "CalculateTaxResponse",
    "CustomerTaxInfo",
    "LockTaxSnapshotRequest",
    "LockTaxSnapshotResponse",
    "TaxBreakdown",
    "TaxBreakdownFlags",
    "TaxCodeCreate",
    "TaxCodeResponse",
    "TaxCodeUpdate",
    "TaxKindTotals",
    "TaxLineInput",
    "TaxLineResult",
    "TaxProfileResponse",
    "TaxProfileUpsert",
    "TaxRateCreate",
    "TaxRateResponse",
    "TaxRateUpdate",
    "TaxSnapshotCreate",
    "TaxSnapshotResponse",
]
