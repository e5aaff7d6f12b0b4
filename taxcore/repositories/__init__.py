from taxcore.repositories.tax_code_repository import TaxCodeRepository
from taxcore.repositories.tax_profile_repository import TaxProfileRepository
from taxcore.repositories.tax_rate_repository import TaxRateRepository
from taxcore.repositories.tax_snapshot_repository import TaxSnapshotRepository

__all__ = [
    "TaxCodeRepository",
    "TaxProfileRepository",
    "TaxRateRepository",
    "TaxSnapshotRepository",
]
