from taxcore.services.jurisdictions.base import ApplyRulesParams, JurisdictionPack
from taxcore.services.jurisdictions.de_pack import DEPackV1
from taxcore.services.jurisdictions.factory import (
    build_jurisdiction_packs,
    get_jurisdiction_pack_factory,
)

__all__ = [
    "ApplyRulesParams",
    "DEPackV1",
    "JurisdictionPack",
    "build_jurisdiction_packs",
    "get_jurisdiction_pack_factory",
]
