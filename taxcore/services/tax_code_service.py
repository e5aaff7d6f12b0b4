"""Tax code service for tenant-scoped codes and their effective-dated rates."""

import logging
from uuid import UUID

from sqlalchemy.orm import Session

from taxcore.core.errors import TaxCodeConflictError, TaxCodeNotFoundError, TaxRateNotFoundError
from taxcore.models.tax_code import TaxCode
from taxcore.models.tax_rate import TaxRate
from taxcore.repositories.tax_code_repository import TaxCodeRepository
from taxcore.repositories.tax_rate_repository import TaxRateRepository
from taxcore.schemas.tax_code import TaxCodeCreate, TaxCodeUpdate, TaxRateCreate, TaxRateUpdate

logger = logging.getLogger(__name__)


class TaxCodeService:
    """Service for tax code and rate management."""

    def __init__(self, tax_code_repo: TaxCodeRepository, tax_rate_repo: TaxRateRepository):
        self.tax_code_repo = tax_code_repo
        self.tax_rate_repo = tax_rate_repo

    @classmethod
    def from_session(cls, db: Session) -> "TaxCodeService":
        return cls(TaxCodeRepository(db), TaxRateRepository(db))

    def list_codes(self, tenant_id: str) -> list[TaxCode]:
        return self.tax_code_repo.get_all(tenant_id)

    def create_code(self, data: TaxCodeCreate, tenant_id: str) -> TaxCode:
        if self.tax_code_repo.get_by_code(data.code, tenant_id):
            raise TaxCodeConflictError(data.code)
        tax_code = self.tax_code_repo.create(data, tenant_id)
        logger.info("Created tax code %s (%s) for tenant %s", tax_code.code, tax_code.kind, tenant_id)
        return tax_code

    def update_code(self, tax_code_id: UUID, data: TaxCodeUpdate, tenant_id: str) -> TaxCode:
        tax_code = self.tax_code_repo.update(tax_code_id, data, tenant_id)
        if tax_code is None:
            raise TaxCodeNotFoundError(tax_code_id)
        return tax_code

    def delete_code(self, tax_code_id: UUID, tenant_id: str) -> None:
        if not self.tax_code_repo.delete(tax_code_id, tenant_id):
            raise TaxCodeNotFoundError(tax_code_id)
        logger.info("Deleted tax code %s for tenant %s", tax_code_id, tenant_id)

    def list_rates(self, tax_code_id: UUID, tenant_id: str) -> list[TaxRate]:
        if self.tax_code_repo.get_by_id(tax_code_id, tenant_id) is None:
            raise TaxCodeNotFoundError(tax_code_id)
        return self.tax_rate_repo.get_by_tax_code(tax_code_id, tenant_id)

    def create_rate(self, tax_code_id: UUID, data: TaxRateCreate, tenant_id: str) -> TaxRate:
        if self.tax_code_repo.get_by_id(tax_code_id, tenant_id) is None:
            raise TaxCodeNotFoundError(tax_code_id)
        return self.tax_rate_repo.create(tax_code_id, data, tenant_id)

    def update_rate(self, tax_rate_id: UUID, data: TaxRateUpdate, tenant_id: str) -> TaxRate:
        rate = self.tax_rate_repo.update(tax_rate_id, data, tenant_id)
        if rate is None:
            raise TaxRateNotFoundError(tax_rate_id)
        return rate
