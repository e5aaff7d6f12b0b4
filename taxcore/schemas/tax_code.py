"""TaxCode and TaxRate schemas."""

from datetime import datetime
from typing import Self
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, model_validator

from taxcore.models.shared import ensure_utc
from taxcore.models.tax_code import TaxCodeKind


class TaxCodeCreate(BaseModel):
    code: str = Field(..., min_length=1, max_length=100)
    kind: TaxCodeKind
    label: str = Field(..., min_length=1, max_length=255)
    is_active: bool = True


class TaxCodeUpdate(BaseModel):
    kind: TaxCodeKind | None = None
    label: str | None = Field(default=None, min_length=1, max_length=255)
    is_active: bool | None = None


class TaxCodeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    tenant_id: str
    code: str
    kind: TaxCodeKind
    label: str
    is_active: bool
    created_at: datetime
    updated_at: datetime


class TaxRateCreate(BaseModel):
    rate_bps: int = Field(..., ge=0, le=10000)
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


class TaxRateUpdate(BaseModel):
    rate_bps: int | None = Field(default=None, ge=0, le=10000)
    effective_to: datetime | None = None


class TaxRateResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    tenant_id: str
    tax_code_id: UUID
    rate_bps: int
    effective_from: datetime
    effective_to: datetime | None = None
    created_at: datetime
    updated_at: datetime
