"""TaxCode repository for data access."""

from uuid import UUID

from sqlalchemy.orm import Session

from taxcore.models.tax_code import TaxCode, TaxCodeKind
from taxcore.models.tax_rate import TaxRate
from taxcore.schemas.tax_code import TaxCodeCreate, TaxCodeUpdate


class TaxCodeRepository:
    """Repository for TaxCode model."""

    def __init__(self, db: Session):
        self.db = db

    def get_all(self, tenant_id: str) -> list[TaxCode]:
        """Get all tax codes of a tenant."""
        return (
            self.db.query(TaxCode)
            .filter(TaxCode.tenant_id == tenant_id)
            .order_by(TaxCode.code.asc())
            .all()
        )

    def get_by_id(self, tax_code_id: UUID, tenant_id: str) -> TaxCode | None:
        """Get a tax code by ID."""
        return (
            self.db.query(TaxCode)
            .filter(TaxCode.id == tax_code_id, TaxCode.tenant_id == tenant_id)
            .first()
        )

    def get_by_code(self, code: str, tenant_id: str) -> TaxCode | None:
        """Get a tax code by its tenant-scoped code string."""
        return (
            self.db.query(TaxCode)
            .filter(TaxCode.code == code, TaxCode.tenant_id == tenant_id)
            .first()
        )

    def get_by_kind(self, kind: TaxCodeKind, tenant_id: str) -> list[TaxCode]:
        """Get all tax codes of a kind, in creation order."""
        return (
            self.db.query(TaxCode)
            .filter(TaxCode.kind == TaxCodeKind(kind).value, TaxCode.tenant_id == tenant_id)
            .order_by(TaxCode.created_at.asc(), TaxCode.code.asc())
            .all()
        )

    def create(self, data: TaxCodeCreate, tenant_id: str) -> TaxCode:
        """Create a new tax code."""
        tax_code = TaxCode(
            tenant_id=tenant_id,
            code=data.code,
            kind=data.kind.value,
            label=data.label,
            is_active=data.is_active,
        )
        self.db.add(tax_code)
        self.db.commit()
        self.db.refresh(tax_code)
        return tax_code

    def update(self, tax_code_id: UUID, data: TaxCodeUpdate, tenant_id: str) -> TaxCode | None:
        """Update a tax code by ID."""
        tax_code = self.get_by_id(tax_code_id, tenant_id)
        if not tax_code:
            return None

        update_data = data.model_dump(exclude_unset=True)
        if update_data.get("kind") is not None:
            update_data["kind"] = TaxCodeKind(update_data["kind"]).value
        for key, value in update_data.items():
            setattr(tax_code, key, value)

        self.db.commit()
        self.db.refresh(tax_code)
        return tax_code

    def delete(self, tax_code_id: UUID, tenant_id: str) -> bool:
        """Delete a tax code and its rates."""
        tax_code = self.get_by_id(tax_code_id, tenant_id)
        if not tax_code:
            return False

        self.db.query(TaxRate).filter(
            TaxRate.tax_code_id == tax_code_id, TaxRate.tenant_id == tenant_id
        ).delete()
        self.db.delete(tax_code)
        self.db.commit()
        return True
