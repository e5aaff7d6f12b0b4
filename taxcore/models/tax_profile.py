"""TaxProfile model for a tenant's effective-dated tax registration."""

from enum import Enum

from sqlalchemy import Column, DateTime, String, UniqueConstraint, func

from taxcore.core.database import Base
from taxcore.models.shared import UUIDType, generate_uuid


class TaxRegime(str, Enum):
    STANDARD_VAT = "STANDARD_VAT"
    SMALL_BUSINESS = "SMALL_BUSINESS"  # No VAT charged (e.g. §19 UStG)


class FilingFrequency(str, Enum):
    MONTHLY = "MONTHLY"
    QUARTERLY = "QUARTERLY"
    YEARLY = "YEARLY"


class TaxProfile(Base):
    """Tax registration of one tenant, valid over [effective_from, effective_to]."""

    __tablename__ = "tax_profiles"
    __table_args__ = (
        UniqueConstraint("tenant_id", "effective_from", name="uq_tax_profiles_tenant_effective_from"),
    )

    id = Column(UUIDType, primary_key=True, default=generate_uuid)
    tenant_id = Column(String(255), nullable=False, index=True)
    country = Column(String(2), nullable=False)
    regime = Column(String(30), nullable=False)
    vat_id = Column(String(50), nullable=True)
    currency = Column(String(3), nullable=False, default="EUR")
    filing_frequency = Column(String(20), nullable=False)
    effective_from = Column(DateTime(timezone=True), nullable=False)
    effective_to = Column(DateTime(timezone=True), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
