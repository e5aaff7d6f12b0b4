"""TaxSnapshot model: the frozen tax calculation of one source document."""

from enum import Enum

from sqlalchemy import (
    BigInteger,
    Column,
    DateTime,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
    func,
)

from taxcore.core.database import Base
from taxcore.models.shared import UUIDType, generate_uuid


class TaxSourceType(str, Enum):
    INVOICE = "INVOICE"
    EXPENSE = "EXPENSE"


class RoundingMode(str, Enum):
    PER_LINE = "PER_LINE"
    PER_DOCUMENT = "PER_DOCUMENT"


class TaxSnapshot(Base):
    """Immutable tax breakdown, at most one per (tenant, source_type, source_id)."""

    __tablename__ = "tax_snapshots"
    __table_args__ = (
        UniqueConstraint("tenant_id", "source_type", "source_id", name="uq_tax_snapshots_source"),
        Index("ix_tax_snapshots_tenant_calculated_at", "tenant_id", "calculated_at"),
    )

    id = Column(UUIDType, primary_key=True, default=generate_uuid)
    tenant_id = Column(String(255), nullable=False, index=True)
    source_type = Column(String(20), nullable=False)
    source_id = Column(String(255), nullable=False)
    jurisdiction = Column(String(10), nullable=False)
    regime = Column(String(30), nullable=False)
    rounding_mode = Column(String(20), nullable=False)
    currency = Column(String(3), nullable=False)
    calculated_at = Column(DateTime(timezone=True), nullable=False)

    subtotal_amount_cents = Column(BigInteger, nullable=False)
    tax_total_amount_cents = Column(BigInteger, nullable=False)
    total_amount_cents = Column(BigInteger, nullable=False)
    breakdown_json = Column(Text, nullable=False)

    version = Column(Integer, nullable=False, default=1)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
