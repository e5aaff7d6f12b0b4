from taxcore.models.tax_code import TaxCode, TaxCodeKind
from taxcore.models.tax_profile import FilingFrequency, TaxProfile, TaxRegime
from taxcore.models.tax_rate import TaxRate
from taxcore.models.tax_snapshot import RoundingMode, TaxSnapshot, TaxSourceType

__all__ = [
    "FilingFrequency",
    "RoundingMode",
    "TaxCode",
    "TaxCodeKind",
    "TaxProfile",
    "TaxRate",
    "TaxRegime",
    "TaxSnapshot",
    "TaxSourceType",
]
