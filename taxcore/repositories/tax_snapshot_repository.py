"""TaxSnapshot repository for data access."""

import logging
from datetime import datetime

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from taxcore.models.shared import ensure_utc
from taxcore.models.tax_snapshot import TaxSnapshot, TaxSourceType
from taxcore.schemas.tax_snapshot import TaxSnapshotCreate

logger = logging.getLogger(__name__)


class TaxSnapshotRepository:
    """Repository for TaxSnapshot model."""

    def __init__(self, db: Session):
        self.db = db

    def get_by_source(
        self, tenant_id: str, source_type: TaxSourceType | str, source_id: str
    ) -> TaxSnapshot | None:
        """Get the snapshot of one source document."""
        return (
            self.db.query(TaxSnapshot)
            .filter(
                TaxSnapshot.tenant_id == tenant_id,
                TaxSnapshot.source_type == TaxSourceType(source_type).value,
                TaxSnapshot.source_id == source_id,
            )
            .first()
        )

    def get_by_period(
        self,
        tenant_id: str,
        start: datetime,
        end: datetime,
        source_type: TaxSourceType | str | None = None,
    ) -> list[TaxSnapshot]:
        """Get snapshots calculated within [start, end], oldest first."""
        query = self.db.query(TaxSnapshot).filter(
            TaxSnapshot.tenant_id == tenant_id,
            TaxSnapshot.calculated_at >= ensure_utc(start),
            TaxSnapshot.calculated_at <= ensure_utc(end),
        )
        if source_type is not None:
            query = query.filter(TaxSnapshot.source_type == TaxSourceType(source_type).value)
        return query.order_by(TaxSnapshot.calculated_at.asc()).all()

    def lock_snapshot(self, data: TaxSnapshotCreate) -> TaxSnapshot:
        """Insert the snapshot unless one already exists for its source.

        The (tenant_id, source_type, source_id) unique constraint decides
        the winner: on conflict the row already stored is returned and the
        draft is discarded.
        """
        snapshot = TaxSnapshot(
            tenant_id=data.tenant_id,
            source_type=data.source_type.value,
            source_id=data.source_id,
            jurisdiction=data.jurisdiction,
            regime=data.regime.value,
            rounding_mode=data.rounding_mode.value,
            currency=data.currency,
            calculated_at=ensure_utc(data.calculated_at),
            subtotal_amount_cents=data.subtotal_amount_cents,
            tax_total_amount_cents=data.tax_total_amount_cents,
            total_amount_cents=data.total_amount_cents,
            breakdown_json=data.breakdown_json,
            version=1,
        )
        self.db.add(snapshot)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            existing = self.get_by_source(data.tenant_id, data.source_type, data.source_id)
            if existing is None:
                raise
            logger.warning(
                "Concurrent lock for %s %s lost the insert, returning snapshot %s",
                data.source_type.value,
                data.source_id,
                existing.id,
            )
            return existing

        self.db.refresh(snapshot)
        return snapshot
