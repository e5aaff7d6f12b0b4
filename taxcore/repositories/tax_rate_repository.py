"""TaxRate repository for data access."""

from datetime import datetime
from uuid import UUID

from sqlalchemy import or_
from sqlalchemy.orm import Session

from taxcore.models.shared import ensure_utc
from taxcore.models.tax_rate import TaxRate
from taxcore.schemas.tax_code import TaxRateCreate, TaxRateUpdate


class TaxRateRepository:
    """Repository for TaxRate model."""

    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, tax_rate_id: UUID, tenant_id: str) -> TaxRate | None:
        return (
            self.db.query(TaxRate)
            .filter(TaxRate.id == tax_rate_id, TaxRate.tenant_id == tenant_id)
            .first()
        )

    def get_by_tax_code(self, tax_code_id: UUID, tenant_id: str) -> list[TaxRate]:
        """Get the rate history of a tax code, newest window first."""
        return (
            self.db.query(TaxRate)
            .filter(TaxRate.tax_code_id == tax_code_id, TaxRate.tenant_id == tenant_id)
            .order_by(TaxRate.effective_from.desc())
            .all()
        )

    def get_effective_rate(
        self, tax_code_id: UUID, tenant_id: str, as_of: datetime
    ) -> TaxRate | None:
        """Get the rate whose window covers *as_of*, preferring the latest start."""
        as_of = ensure_utc(as_of)
        return (
            self.db.query(TaxRate)
            .filter(
                TaxRate.tax_code_id == tax_code_id,
                TaxRate.tenant_id == tenant_id,
                TaxRate.effective_from <= as_of,
                or_(TaxRate.effective_to.is_(None), TaxRate.effective_to >= as_of),
            )
            .order_by(TaxRate.effective_from.desc())
            .first()
        )

    def create(self, tax_code_id: UUID, data: TaxRateCreate, tenant_id: str) -> TaxRate:
        """Create a new rate for a tax code."""
        rate = TaxRate(
            tenant_id=tenant_id,
            tax_code_id=tax_code_id,
            rate_bps=data.rate_bps,
            effective_from=ensure_utc(data.effective_from),
            effective_to=ensure_utc(data.effective_to) if data.effective_to else None,
        )
        self.db.add(rate)
        self.db.commit()
        self.db.refresh(rate)
        return rate

    def update(self, tax_rate_id: UUID, data: TaxRateUpdate, tenant_id: str) -> TaxRate | None:
        """Update a rate by ID."""
        rate = self.get_by_id(tax_rate_id, tenant_id)
        if not rate:
            return None

        update_data = data.model_dump(exclude_unset=True)
        if update_data.get("effective_to") is not None:
            update_data["effective_to"] = ensure_utc(update_data["effective_to"])
        for key, value in update_data.items():
            setattr(rate, key, value)

        self.db.commit()
        self.db.refresh(rate)
        return rate
