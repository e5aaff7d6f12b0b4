"""TaxCode model for tenant-scoped tax categories."""

from enum import Enum

from sqlalchemy import Boolean, Column, DateTime, String, UniqueConstraint, func

from taxcore.core.database import Base
from taxcore.models.shared import UUIDType, generate_uuid


class TaxCodeKind(str, Enum):
    STANDARD = "STANDARD"
    REDUCED = "REDUCED"
    REVERSE_CHARGE = "REVERSE_CHARGE"  # Liability shifts to the customer
    EXEMPT = "EXEMPT"
    ZERO = "ZERO"


ZERO_TAX_KINDS = frozenset({TaxCodeKind.EXEMPT, TaxCodeKind.ZERO, TaxCodeKind.REVERSE_CHARGE})
RATED_KINDS = frozenset({TaxCodeKind.STANDARD, TaxCodeKind.REDUCED})


def is_zero_tax(kind: TaxCodeKind | str) -> bool:
    """Kinds that always resolve to a 0 rate, whatever rates are configured."""
    return TaxCodeKind(kind) in ZERO_TAX_KINDS


def requires_rate(kind: TaxCodeKind | str) -> bool:
    return TaxCodeKind(kind) in RATED_KINDS


def needs_reverse_charge_note(kind: TaxCodeKind | str) -> bool:
    return TaxCodeKind(kind) == TaxCodeKind.REVERSE_CHARGE


class TaxCode(Base):
    """Named category of tax treatment, unique per tenant by code."""

    __tablename__ = "tax_codes"
    __table_args__ = (UniqueConstraint("tenant_id", "code", name="uq_tax_codes_tenant_code"),)

    id = Column(UUIDType, primary_key=True, default=generate_uuid)
    tenant_id = Column(String(255), nullable=False, index=True)
    code = Column(String(100), nullable=False)
    kind = Column(String(30), nullable=False)
    label = Column(String(255), nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
