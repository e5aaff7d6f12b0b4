"""Tax engine: resolves the applicable profile and delegates to a jurisdiction pack."""

from collections.abc import Iterable
from datetime import datetime

from sqlalchemy.orm import Session

from taxcore.core.errors import JurisdictionPackNotFoundError, NoActiveTaxProfileError
from taxcore.models.shared import ensure_utc
from taxcore.models.tax_profile import TaxProfile, TaxRegime
from taxcore.repositories.tax_code_repository import TaxCodeRepository
from taxcore.repositories.tax_profile_repository import TaxProfileRepository
from taxcore.repositories.tax_rate_repository import TaxRateRepository
from taxcore.schemas.tax_calculation import CalculateTaxRequest, TaxBreakdown
from taxcore.services.jurisdictions.base import ApplyRulesParams, JurisdictionPack
from taxcore.services.jurisdictions.factory import build_jurisdiction_packs


def is_profile_active(profile: TaxProfile, as_of: datetime) -> bool:
    """Check the profile's [effective_from, effective_to] window covers *as_of*."""
    as_of = ensure_utc(as_of)
    if ensure_utc(profile.effective_from) > as_of:  # type: ignore[arg-type]
        return False
    return profile.effective_to is None or ensure_utc(profile.effective_to) >= as_of  # type: ignore[arg-type]


class TaxEngineService:
    """Computes live tax breakdowns; never caches or persists them."""

    def __init__(self, profile_repo: TaxProfileRepository, packs: Iterable[JurisdictionPack]):
        self.profile_repo = profile_repo
        self._packs: dict[str, JurisdictionPack] = {pack.code.upper(): pack for pack in packs}

    @classmethod
    def from_session(cls, db: Session) -> "TaxEngineService":
        """Wire the engine with SQLAlchemy repositories and every registered pack."""
        packs = build_jurisdiction_packs(TaxCodeRepository(db), TaxRateRepository(db))
        return cls(TaxProfileRepository(db), packs)

    def get_supported_jurisdictions(self) -> list[str]:
        return sorted(self._packs)

    def get_pack(self, jurisdiction: str) -> JurisdictionPack:
        pack = self._packs.get(jurisdiction.upper())
        if pack is None:
            raise JurisdictionPackNotFoundError(jurisdiction)
        return pack

    def resolve_active_profile(self, tenant_id: str, as_of: datetime) -> TaxProfile:
        """Get the profile in force at *as_of*.

        The window is checked again here: the repository query filters by
        window already, but the returned profile is what the calculation
        trusts.
        """
        profile = self.profile_repo.get_active(tenant_id, as_of)
        if profile is None or not is_profile_active(profile, as_of):
            raise NoActiveTaxProfileError(tenant_id, ensure_utc(as_of).isoformat())
        return profile

    def calculate(self, data: CalculateTaxRequest, tenant_id: str) -> TaxBreakdown:
        """Calculate the tax breakdown for a document's lines."""
        document_date = ensure_utc(data.document_date)
        profile = self.resolve_active_profile(tenant_id, document_date)

        pack = self.get_pack(data.jurisdiction or str(profile.country))

        return pack.apply_rules(
            ApplyRulesParams(
                regime=TaxRegime(profile.regime),
                document_date=document_date,
                currency=data.currency or str(profile.currency),
                customer=data.customer,
                lines=data.lines,
                tenant_id=tenant_id,
            )
        )
