"""Domain errors raised by the tax services.

All of them subclass ``ValueError`` so callers that only care about
"bad input or missing data" can keep catching that; routers map the
NotFound family to 404 and conflicts to 409.
"""


class TaxNotFoundError(ValueError):
    """Base class for lookups that found nothing."""


class NoActiveTaxProfileError(TaxNotFoundError):
    def __init__(self, tenant_id: str, as_of: object) -> None:
        self.tenant_id = tenant_id
        self.as_of = as_of
        super().__init__(f"No active tax profile found for tenant {tenant_id} at {as_of}")


class JurisdictionPackNotFoundError(TaxNotFoundError):
    def __init__(self, jurisdiction: str) -> None:
        self.jurisdiction = jurisdiction
        super().__init__(f"Jurisdiction pack not found: {jurisdiction}")


class TaxCodeNotFoundError(TaxNotFoundError):
    def __init__(self, tax_code_id: object) -> None:
        self.tax_code_id = tax_code_id
        super().__init__(f"Tax code {tax_code_id} not found")


class TaxRateNotFoundError(TaxNotFoundError):
    def __init__(self, tax_rate_id: object) -> None:
        self.tax_rate_id = tax_rate_id
        super().__init__(f"Tax rate {tax_rate_id} not found")


class TaxSnapshotNotFoundError(TaxNotFoundError):
    def __init__(self, source_type: str, source_id: str) -> None:
        self.source_type = source_type
        self.source_id = source_id
        super().__init__(f"Tax snapshot for {source_type} {source_id} not found")


class TaxCodeConflictError(ValueError):
    def __init__(self, code: str) -> None:
        self.code = code
        super().__init__(f"Tax code '{code}' already exists")
