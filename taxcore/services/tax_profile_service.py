"""Tax profile service for managing a tenant's effective-dated registrations."""

import logging
from datetime import datetime

from sqlalchemy.orm import Session

from taxcore.models.shared import utc_now
from taxcore.models.tax_profile import TaxProfile
from taxcore.repositories.tax_profile_repository import TaxProfileRepository
from taxcore.schemas.tax_profile import TaxProfileUpsert

logger = logging.getLogger(__name__)


class TaxProfileService:
    """Service for reading and upserting tax profiles."""

    def __init__(self, profile_repo: TaxProfileRepository):
        self.profile_repo = profile_repo

    @classmethod
    def from_session(cls, db: Session) -> "TaxProfileService":
        return cls(TaxProfileRepository(db))

    def get_active_profile(self, tenant_id: str, as_of: datetime | None = None) -> TaxProfile | None:
        """Get the profile in force at *as_of* (now when omitted)."""
        return self.profile_repo.get_active(tenant_id, as_of or utc_now())

    def list_profiles(self, tenant_id: str) -> list[TaxProfile]:
        return self.profile_repo.get_all(tenant_id)

    def upsert_profile(self, data: TaxProfileUpsert, tenant_id: str) -> TaxProfile:
        """Create or update the profile starting at ``data.effective_from``.

        Overlapping windows under a different effective_from are accepted;
        active-profile resolution then prefers the latest effective_from.
        """
        overlapping = self.profile_repo.get_overlapping(
            tenant_id, data.effective_from, data.effective_to
        )
        if overlapping:
            logger.warning(
                "Tax profile for tenant %s starting %s overlaps %d existing profile(s): %s",
                tenant_id,
                data.effective_from.isoformat(),
                len(overlapping),
                ", ".join(str(p.id) for p in overlapping),
            )

        profile = self.profile_repo.upsert(data, tenant_id)
        logger.info(
            "Upserted tax profile %s for tenant %s (%s, %s)",
            profile.id,
            tenant_id,
            profile.country,
            profile.regime,
        )
        return profile
