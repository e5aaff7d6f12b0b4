"""Tax snapshot service: freezes a tax calculation for a finalized document.

Locking is idempotent per (tenant, source_type, source_id). Once a
snapshot exists for a source it is returned as stored, whatever lines the
caller sends later; the storage uniqueness constraint, not the lookup
below, is what guarantees a single row under concurrent requests.
"""

import logging
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy.orm import Session

from taxcore.core.config import settings
from taxcore.core.errors import NoActiveTaxProfileError, TaxSnapshotNotFoundError
from taxcore.models.shared import ensure_utc, utc_now
from taxcore.models.tax_profile import TaxRegime
from taxcore.models.tax_snapshot import TaxSnapshot, TaxSourceType
from taxcore.repositories.tax_profile_repository import TaxProfileRepository
from taxcore.repositories.tax_snapshot_repository import TaxSnapshotRepository
from taxcore.schemas.tax_calculation import CalculateTaxRequest, LockTaxSnapshotRequest
from taxcore.schemas.tax_snapshot import TaxSnapshotCreate, TaxSnapshotResponse
from taxcore.services.tax_engine import TaxEngineService

logger = logging.getLogger(__name__)


@dataclass
class TaxRequestContext:
    """Caller identity and tracing ids for one request."""

    tenant_id: str
    user_id: str | None = None
    correlation_id: str | None = None
    idempotency_key: str | None = None


def _isoformat(value: datetime) -> str:
    return ensure_utc(value).isoformat()


def snapshot_to_response(snapshot: TaxSnapshot) -> TaxSnapshotResponse:
    """Map a stored snapshot to its external form with ISO-8601 timestamps."""
    return TaxSnapshotResponse(
        id=snapshot.id,  # type: ignore[arg-type]
        tenant_id=str(snapshot.tenant_id),
        source_type=TaxSourceType(snapshot.source_type),
        source_id=str(snapshot.source_id),
        jurisdiction=str(snapshot.jurisdiction),
        regime=TaxRegime(snapshot.regime),
        rounding_mode=snapshot.rounding_mode,  # type: ignore[arg-type]
        currency=str(snapshot.currency),
        calculated_at=_isoformat(snapshot.calculated_at),  # type: ignore[arg-type]
        subtotal_amount_cents=int(snapshot.subtotal_amount_cents),
        tax_total_amount_cents=int(snapshot.tax_total_amount_cents),
        total_amount_cents=int(snapshot.total_amount_cents),
        breakdown_json=str(snapshot.breakdown_json),
        version=int(snapshot.version),
        created_at=_isoformat(snapshot.created_at),  # type: ignore[arg-type]
        updated_at=_isoformat(snapshot.updated_at),  # type: ignore[arg-type]
    )


class TaxSnapshotService:
    """Service for locking and reading tax snapshots."""

    def __init__(
        self,
        snapshot_repo: TaxSnapshotRepository,
        profile_repo: TaxProfileRepository,
        tax_engine: TaxEngineService,
    ):
        self.snapshot_repo = snapshot_repo
        self.profile_repo = profile_repo
        self.tax_engine = tax_engine

    @classmethod
    def from_session(cls, db: Session) -> "TaxSnapshotService":
        return cls(
            TaxSnapshotRepository(db),
            TaxProfileRepository(db),
            TaxEngineService.from_session(db),
        )

    def lock_snapshot(
        self, data: LockTaxSnapshotRequest, ctx: TaxRequestContext
    ) -> TaxSnapshotResponse:
        """Create the snapshot of a source document, or return the existing one."""
        existing = self.snapshot_repo.get_by_source(ctx.tenant_id, data.source_type, data.source_id)
        if existing is not None:
            return snapshot_to_response(existing)

        breakdown = self.tax_engine.calculate(
            CalculateTaxRequest(
                jurisdiction=data.jurisdiction,
                document_date=data.document_date,
                currency=data.currency,
                customer=data.customer,
                lines=data.lines,
            ),
            ctx.tenant_id,
        )

        # Regime label recorded for audit, independent of the breakdown
        document_date = ensure_utc(data.document_date)
        profile = self.profile_repo.get_active(ctx.tenant_id, document_date)
        if profile is None:
            raise NoActiveTaxProfileError(ctx.tenant_id, document_date.isoformat())

        snapshot = self.snapshot_repo.lock_snapshot(
            TaxSnapshotCreate(
                tenant_id=ctx.tenant_id,
                source_type=data.source_type,
                source_id=data.source_id,
                jurisdiction=data.jurisdiction or settings.TAX_DEFAULT_JURISDICTION,
                regime=TaxRegime(profile.regime),
                rounding_mode=breakdown.rounding_mode,
                currency=data.currency or str(profile.currency),
                calculated_at=utc_now(),
                subtotal_amount_cents=breakdown.subtotal_amount_cents,
                tax_total_amount_cents=breakdown.tax_total_amount_cents,
                total_amount_cents=breakdown.total_amount_cents,
                breakdown_json=breakdown.model_dump_json(),
            )
        )
        logger.info(
            "Locked tax snapshot %s for %s %s (tenant %s, correlation %s)",
            snapshot.id,
            data.source_type.value,
            data.source_id,
            ctx.tenant_id,
            ctx.correlation_id,
        )
        return snapshot_to_response(snapshot)

    def get_snapshot(
        self, tenant_id: str, source_type: TaxSourceType, source_id: str
    ) -> TaxSnapshotResponse:
        snapshot = self.snapshot_repo.get_by_source(tenant_id, source_type, source_id)
        if snapshot is None:
            raise TaxSnapshotNotFoundError(TaxSourceType(source_type).value, source_id)
        return snapshot_to_response(snapshot)

    def list_snapshots(
        self,
        tenant_id: str,
        start: datetime,
        end: datetime,
        source_type: TaxSourceType | None = None,
    ) -> list[TaxSnapshotResponse]:
        snapshots = self.snapshot_repo.get_by_period(tenant_id, start, end, source_type)
        return [snapshot_to_response(s) for s in snapshots]
