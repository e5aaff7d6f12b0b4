"""Tax API endpoints."""

from datetime import datetime
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from taxcore.core.database import get_db
from taxcore.core.errors import TaxCodeConflictError, TaxNotFoundError
from taxcore.core.tenancy import get_current_tenant, get_request_context
from taxcore.models.shared import ensure_utc
from taxcore.models.tax_code import TaxCode
from taxcore.models.tax_profile import TaxProfile
from taxcore.models.tax_rate import TaxRate
from taxcore.models.tax_snapshot import TaxSourceType
from taxcore.schemas.tax_calculation import (
    CalculateTaxRequest,
    CalculateTaxResponse,
    LockTaxSnapshotRequest,
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
from taxcore.schemas.tax_snapshot import LockTaxSnapshotResponse, TaxSnapshotResponse
from taxcore.services.tax_code_service import TaxCodeService
from taxcore.services.tax_engine import TaxEngineService
from taxcore.services.tax_profile_service import TaxProfileService
from taxcore.services.tax_snapshot_service import TaxRequestContext, TaxSnapshotService

router = APIRouter()


@router.get(
    "/profile",
    response_model=ActiveTaxProfileResponse,
    summary="Get active tax profile",
)
async def get_profile(
    db: Session = Depends(get_db),
    tenant_id: str = Depends(get_current_tenant),
) -> ActiveTaxProfileResponse:
    """Get the tax profile in force now, or ``null`` when none is."""
    profile = TaxProfileService.from_session(db).get_active_profile(tenant_id)
    return ActiveTaxProfileResponse(
        profile=TaxProfileResponse.model_validate(profile) if profile else None
    )


@router.put(
    "/profile",
    response_model=TaxProfileResponse,
    summary="Upsert tax profile",
    responses={422: {"description": "Validation error"}},
)
async def upsert_profile(
    data: TaxProfileUpsert,
    db: Session = Depends(get_db),
    tenant_id: str = Depends(get_current_tenant),
) -> TaxProfile:
    """Create or update the profile starting at ``effective_from``."""
    return TaxProfileService.from_session(db).upsert_profile(data, tenant_id)


@router.get(
    "/profiles",
    response_model=list[TaxProfileResponse],
    summary="List tax profile history",
)
async def list_profiles(
    db: Session = Depends(get_db),
    tenant_id: str = Depends(get_current_tenant),
) -> list[TaxProfile]:
    return TaxProfileService.from_session(db).list_profiles(tenant_id)


@router.get(
    "/codes",
    response_model=list[TaxCodeResponse],
    summary="List tax codes",
)
async def list_codes(
    db: Session = Depends(get_db),
    tenant_id: str = Depends(get_current_tenant),
) -> list[TaxCode]:
    return TaxCodeService.from_session(db).list_codes(tenant_id)


@router.post(
    "/codes",
    response_model=TaxCodeResponse,
    status_code=201,
    summary="Create tax code",
    responses={
        409: {"description": "Tax code with this code already exists"},
        422: {"description": "Validation error"},
    },
)
async def create_code(
    data: TaxCodeCreate,
    db: Session = Depends(get_db),
    tenant_id: str = Depends(get_current_tenant),
) -> TaxCode:
    try:
        return TaxCodeService.from_session(db).create_code(data, tenant_id)
    except TaxCodeConflictError as e:
        raise HTTPException(status_code=409, detail=str(e)) from None


@router.patch(
    "/codes/{tax_code_id}",
    response_model=TaxCodeResponse,
    summary="Update tax code",
    responses={404: {"description": "Tax code not found"}},
)
async def update_code(
    tax_code_id: UUID,
    data: TaxCodeUpdate,
    db: Session = Depends(get_db),
    tenant_id: str = Depends(get_current_tenant),
) -> TaxCode:
    try:
        return TaxCodeService.from_session(db).update_code(tax_code_id, data, tenant_id)
    except TaxNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from None


@router.delete(
    "/codes/{tax_code_id}",
    status_code=204,
    summary="Delete tax code",
    responses={404: {"description": "Tax code not found"}},
)
async def delete_code(
    tax_code_id: UUID,
    db: Session = Depends(get_db),
    tenant_id: str = Depends(get_current_tenant),
) -> None:
    try:
        TaxCodeService.from_session(db).delete_code(tax_code_id, tenant_id)
    except TaxNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from None


@router.get(
    "/codes/{tax_code_id}/rates",
    response_model=list[TaxRateResponse],
    summary="List tax rates of a code",
    responses={404: {"description": "Tax code not found"}},
)
async def list_rates(
    tax_code_id: UUID,
    db: Session = Depends(get_db),
    tenant_id: str = Depends(get_current_tenant),
) -> list[TaxRate]:
    try:
        return TaxCodeService.from_session(db).list_rates(tax_code_id, tenant_id)
    except TaxNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from None


@router.post(
    "/codes/{tax_code_id}/rates",
    response_model=TaxRateResponse,
    status_code=201,
    summary="Create tax rate",
    responses={
        404: {"description": "Tax code not found"},
        422: {"description": "Validation error"},
    },
)
async def create_rate(
    tax_code_id: UUID,
    data: TaxRateCreate,
    db: Session = Depends(get_db),
    tenant_id: str = Depends(get_current_tenant),
) -> TaxRate:
    try:
        return TaxCodeService.from_session(db).create_rate(tax_code_id, data, tenant_id)
    except TaxNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from None


@router.patch(
    "/rates/{tax_rate_id}",
    response_model=TaxRateResponse,
    summary="Update tax rate",
    responses={404: {"description": "Tax rate not found"}},
)
async def update_rate(
    tax_rate_id: UUID,
    data: TaxRateUpdate,
    db: Session = Depends(get_db),
    tenant_id: str = Depends(get_current_tenant),
) -> TaxRate:
    try:
        return TaxCodeService.from_session(db).update_rate(tax_rate_id, data, tenant_id)
    except TaxNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from None


@router.post(
    "/calculate",
    response_model=CalculateTaxResponse,
    summary="Calculate tax",
    responses={
        404: {"description": "No active tax profile or jurisdiction pack not found"},
        422: {"description": "Validation error"},
    },
)
async def calculate_tax(
    data: CalculateTaxRequest,
    db: Session = Depends(get_db),
    tenant_id: str = Depends(get_current_tenant),
) -> CalculateTaxResponse:
    """Preview the tax breakdown of a draft document."""
    try:
        breakdown = TaxEngineService.from_session(db).calculate(data, tenant_id)
    except TaxNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from None
    return CalculateTaxResponse(breakdown=breakdown)


@router.post(
    "/snapshots/lock",
    response_model=LockTaxSnapshotResponse,
    status_code=201,
    summary="Lock tax snapshot",
    responses={
        404: {"description": "No active tax profile or jurisdiction pack not found"},
        422: {"description": "Validation error"},
    },
)
async def lock_snapshot(
    data: LockTaxSnapshotRequest,
    db: Session = Depends(get_db),
    ctx: TaxRequestContext = Depends(get_request_context),
) -> LockTaxSnapshotResponse:
    """Freeze the tax of a finalized document; replays return the stored snapshot."""
    try:
        snapshot = TaxSnapshotService.from_session(db).lock_snapshot(data, ctx)
    except TaxNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from None
    return LockTaxSnapshotResponse(snapshot=snapshot)


@router.get(
    "/snapshots",
    response_model=list[TaxSnapshotResponse],
    summary="List tax snapshots by period",
)
async def list_snapshots(
    start: datetime = Query(...),
    end: datetime = Query(...),
    source_type: TaxSourceType | None = Query(default=None),
    db: Session = Depends(get_db),
    tenant_id: str = Depends(get_current_tenant),
) -> list[TaxSnapshotResponse]:
    if ensure_utc(end) < ensure_utc(start):
        raise HTTPException(status_code=400, detail="end must not be before start")
    return TaxSnapshotService.from_session(db).list_snapshots(tenant_id, start, end, source_type)


@router.get(
    "/snapshots/{source_type}/{source_id}",
    response_model=TaxSnapshotResponse,
    summary="Get tax snapshot",
    responses={404: {"description": "Tax snapshot not found"}},
)
async def get_snapshot(
    source_type: TaxSourceType,
    source_id: str,
    db: Session = Depends(get_db),
    tenant_id: str = Depends(get_current_tenant),
) -> TaxSnapshotResponse:
    try:
        return TaxSnapshotService.from_session(db).get_snapshot(tenant_id, source_type, source_id)
    except TaxNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from None
