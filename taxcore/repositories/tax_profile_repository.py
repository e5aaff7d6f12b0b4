"""TaxProfile repository for data access."""

from datetime import datetime

from sqlalchemy import or_
from sqlalchemy.orm import Session

from taxcore.models.shared import ensure_utc
from taxcore.models.tax_profile import TaxProfile
from taxcore.schemas.tax_profile import TaxProfileUpsert


class TaxProfileRepository:
    """Repository for TaxProfile model."""

    def __init__(self, db: Session):
        self.db = db

    def get_active(self, tenant_id: str, as_of: datetime) -> TaxProfile | None:
        """Get the profile in force at *as_of*.

        Among profiles whose window covers the instant, the one with the
        latest effective_from wins.
        """
        as_of = ensure_utc(as_of)
        return (
            self.db.query(TaxProfile)
            .filter(
                TaxProfile.tenant_id == tenant_id,
                TaxProfile.effective_from <= as_of,
                or_(TaxProfile.effective_to.is_(None), TaxProfile.effective_to >= as_of),
            )
            .order_by(TaxProfile.effective_from.desc())
            .first()
        )

    def get_by_effective_from(self, tenant_id: str, effective_from: datetime) -> TaxProfile | None:
        return (
            self.db.query(TaxProfile)
            .filter(
                TaxProfile.tenant_id == tenant_id,
                TaxProfile.effective_from == ensure_utc(effective_from),
            )
            .first()
        )

    def get_latest(self, tenant_id: str) -> TaxProfile | None:
        """Get the profile with the most recent effective_from, in force or not."""
        return (
            self.db.query(TaxProfile)
            .filter(TaxProfile.tenant_id == tenant_id)
            .order_by(TaxProfile.effective_from.desc())
            .first()
        )

    def get_all(self, tenant_id: str) -> list[TaxProfile]:
        """Get the profile history of a tenant, oldest first."""
        return (
            self.db.query(TaxProfile)
            .filter(TaxProfile.tenant_id == tenant_id)
            .order_by(TaxProfile.effective_from.asc())
            .all()
        )

    def get_overlapping(
        self,
        tenant_id: str,
        effective_from: datetime,
        effective_to: datetime | None,
    ) -> list[TaxProfile]:
        """Get profiles with another effective_from whose window intersects the given one."""
        effective_from = ensure_utc(effective_from)
        query = self.db.query(TaxProfile).filter(
            TaxProfile.tenant_id == tenant_id,
            TaxProfile.effective_from != effective_from,
            or_(TaxProfile.effective_to.is_(None), TaxProfile.effective_to >= effective_from),
        )
        if effective_to is not None:
            query = query.filter(TaxProfile.effective_from <= ensure_utc(effective_to))
        return query.order_by(TaxProfile.effective_from.asc()).all()

    def upsert(self, data: TaxProfileUpsert, tenant_id: str) -> TaxProfile:
        """Create or update the profile keyed on (tenant_id, effective_from)."""
        effective_to = ensure_utc(data.effective_to) if data.effective_to else None
        profile = self.get_by_effective_from(tenant_id, data.effective_from)
        if profile is None:
            profile = TaxProfile(
                tenant_id=tenant_id,
                effective_from=ensure_utc(data.effective_from),
            )
            self.db.add(profile)

        profile.country = data.country.upper()  # type: ignore[assignment]
        profile.regime = data.regime.value  # type: ignore[assignment]
        profile.vat_id = data.vat_id  # type: ignore[assignment]
        profile.currency = data.currency.upper()  # type: ignore[assignment]
        profile.filing_frequency = data.filing_frequency.value  # type: ignore[assignment]
        profile.effective_to = effective_to  # type: ignore[assignment]

        self.db.commit()
        self.db.refresh(profile)
        return profile
