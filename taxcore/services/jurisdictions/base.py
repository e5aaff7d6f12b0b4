"""Jurisdiction pack base class.

A jurisdiction pack encodes one country's tax rules. The tax engine only
talks to this interface and picks a pack by its ``code``, so supporting a
new country means adding a pack, not touching the engine.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from taxcore.models.tax_code import TaxCodeKind
from taxcore.models.tax_profile import TaxRegime
from taxcore.schemas.tax_calculation import CustomerTaxInfo, TaxBreakdown, TaxLineInput


@dataclass
class ApplyRulesParams:
    """Everything a pack needs to compute a breakdown."""

    regime: TaxRegime
    document_date: datetime
    currency: str
    customer: CustomerTaxInfo | None
    lines: list[TaxLineInput]
    tenant_id: str


class JurisdictionPack(ABC):
    """Abstract base class for per-country tax rule packs."""

    @property
    @abstractmethod
    def code(self) -> str:
        """Return the jurisdiction code, e.g. ``"DE"``."""
        ...  # pragma: no cover

    @abstractmethod
    def get_rate_bps(
        self,
        tax_code_kind_or_id: TaxCodeKind | UUID | str,
        document_date: datetime,
        tenant_id: str,
    ) -> int:
        """Resolve a rate in basis points for a tax code kind or tax code id."""
        ...  # pragma: no cover

    @abstractmethod
    def apply_rules(self, params: ApplyRulesParams) -> TaxBreakdown:
        """Compute the full tax breakdown for a set of lines."""
        ...  # pragma: no cover
