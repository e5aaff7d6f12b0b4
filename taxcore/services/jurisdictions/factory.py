from collections.abc import Callable

from taxcore.repositories.tax_code_repository import TaxCodeRepository
from taxcore.repositories.tax_rate_repository import TaxRateRepository
from taxcore.services.jurisdictions.base import JurisdictionPack
from taxcore.services.jurisdictions.de_pack import DEPackV1

# Every pack is built from the tenant-scoped code and rate repositories.
PackFactory = Callable[[TaxCodeRepository, TaxRateRepository], JurisdictionPack]

_PACKS: dict[str, PackFactory] = {
    "DE": DEPackV1,
}


def get_jurisdiction_pack_factory(code: str) -> PackFactory | None:
    return _PACKS.get(code.upper())


def build_jurisdiction_packs(
    tax_code_repo: TaxCodeRepository, tax_rate_repo: TaxRateRepository
) -> list[JurisdictionPack]:
    """Instantiate one pack per registered jurisdiction."""
    return [factory(tax_code_repo, tax_rate_repo) for factory in _PACKS.values()]
