"""TaxProfile schemas."""

from datetime import datetime
from typing import Self
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, model_validator

from taxcore.core.config import settings
from taxcore.models.shared import ensure_utc
from taxcore.models.tax_profile import FilingFrequency, TaxRegime


class TaxProfileUpsert(BaseModel):
    country: str = Field(..., min_length=2, max_length=2)
    regime: TaxRegime
    vat_id: str | None = Field(default=None, max_length=50)
    currency: str = Field(default=settings.TAX_DEFAULT_CURRENCY, min_length=3, max_length=3)
    filing_frequency: FilingFrequency
    effective_from: datetime
    effective_to: datetime | None = None

    @model_validator(mode="after")
    def validate_window(self) -> Self:
        """Validate effective_to does not precede effective_from."""
        if self.effective_to is not None and ensure_utc(self.effective_to) < ensure_utc(
            self.effective_from
        ):
            msg = "effective_to must not be before effective_from"
            raise ValueError(msg)
        return self


class TaxProfileResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    tenant_id: str
    country: str
    regime: TaxRegime
    vat_id: str | None = None
    currency: str
    filing_frequency: FilingFrequency
    effective_from: datetime
    effective_to: datetime | None = None
    created_at: datetime
    updated_at: datetime


class ActiveTaxProfileResponse(BaseModel):
    profile: TaxProfileResponse | None = None
