"""TaxRate model for effective-dated rates of a tax code."""

from sqlalchemy import Column, DateTime, ForeignKey, Index, Integer, String, func

from taxcore.core.database import Base
from taxcore.models.shared import UUIDType, generate_uuid


class TaxRate(Base):
    """Rate in basis points (1900 = 19%) attached to a TaxCode."""

    __tablename__ = "tax_rates"
    __table_args__ = (Index("ix_tax_rates_code_effective", "tax_code_id", "effective_from"),)

    id = Column(UUIDType, primary_key=True, default=generate_uuid)
    tenant_id = Column(String(255), nullable=False, index=True)
    tax_code_id = Column(
        UUIDType, ForeignKey("tax_codes.id", ondelete="CASCADE"), nullable=False, index=True
    )
    rate_bps = Column(Integer, nullable=False)
    effective_from = Column(DateTime(timezone=True), nullable=False)
    effective_to = Column(DateTime(timezone=True), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
