"""Germany (DE) jurisdiction pack, v1: German VAT rules for freelancers."""

import logging
from datetime import datetime
from uuid import UUID

from taxcore.models.tax_code import (
    TaxCodeKind,
    is_zero_tax,
    needs_reverse_charge_note,
    requires_rate,
)
from taxcore.models.tax_profile import TaxRegime
from taxcore.models.tax_snapshot import RoundingMode
from taxcore.repositories.tax_code_repository import TaxCodeRepository
from taxcore.repositories.tax_rate_repository import TaxRateRepository
from taxcore.schemas.tax_calculation import (
    TaxBreakdown,
    TaxBreakdownFlags,
    TaxKindTotals,
    TaxLineInput,
    TaxLineResult,
)
from taxcore.services.jurisdictions.base import ApplyRulesParams, JurisdictionPack
from taxcore.services.rounding_policy import calculate_tax_cents

logger = logging.getLogger(__name__)

# Statutory rates used when the tenant has not configured a code of the kind
DEFAULT_RATES_BPS: dict[TaxCodeKind, int] = {
    TaxCodeKind.STANDARD: 1900,
    TaxCodeKind.REDUCED: 700,
}

_KIND_VALUES = frozenset(kind.value for kind in TaxCodeKind)


def _as_kind(value: TaxCodeKind | UUID | str) -> TaxCodeKind | None:
    if isinstance(value, TaxCodeKind):
        return value
    if isinstance(value, str) and value in _KIND_VALUES:
        return TaxCodeKind(value)
    return None


class DEPackV1(JurisdictionPack):
    """German VAT: standard regime plus the §19 UStG small-business exemption."""

    def __init__(self, tax_code_repo: TaxCodeRepository, tax_rate_repo: TaxRateRepository):
        self.tax_code_repo = tax_code_repo
        self.tax_rate_repo = tax_rate_repo

    @property
    def code(self) -> str:
        return "DE"

    def get_rate_bps(
        self,
        tax_code_kind_or_id: TaxCodeKind | UUID | str,
        document_date: datetime,
        tenant_id: str,
    ) -> int:
        """Get the rate in basis points for a kind name or a tax code id.

        Kinds resolve through the tenant's first active code of that kind
        (first code overall if none is active), falling back to the
        statutory default when the tenant has none. Anything else is taken
        as a tax code id and looked up directly.
        """
        kind = _as_kind(tax_code_kind_or_id)
        if kind is None:
            try:
                tax_code_id = (
                    tax_code_kind_or_id
                    if isinstance(tax_code_kind_or_id, UUID)
                    else UUID(str(tax_code_kind_or_id))
                )
            except ValueError:
                logger.warning(
                    "Tax code %r for tenant %s is neither a kind nor an id, rate 0",
                    tax_code_kind_or_id,
                    tenant_id,
                )
                return 0
            rate = self.tax_rate_repo.get_effective_rate(tax_code_id, tenant_id, document_date)
            return int(rate.rate_bps) if rate else 0

        if is_zero_tax(kind):
            return 0

        codes = self.tax_code_repo.get_by_kind(kind, tenant_id)
        if not codes:
            return DEFAULT_RATES_BPS.get(kind, 0)

        active_code = next((c for c in codes if c.is_active), codes[0])
        rate = self.tax_rate_repo.get_effective_rate(
            active_code.id,  # type: ignore[arg-type]
            tenant_id,
            document_date,
        )
        return int(rate.rate_bps) if rate else 0

    def apply_rules(self, params: ApplyRulesParams) -> TaxBreakdown:
        if TaxRegime(params.regime) == TaxRegime.SMALL_BUSINESS:
            return self._apply_small_business_rules(params.lines)
        return self._apply_standard_vat(params.lines, params.document_date, params.tenant_id)

    def _apply_small_business_rules(self, lines: list[TaxLineInput]) -> TaxBreakdown:
        """Small business regime (§19 UStG): no VAT on any line."""
        line_results = [
            TaxLineResult(
                line_id=line.id,
                tax_code_id=None,
                kind=TaxCodeKind.EXEMPT,
                rate_bps=0,
                net_amount_cents=line.net_amount_cents,
                tax_amount_cents=0,
                gross_amount_cents=line.net_amount_cents,
            )
            for line in lines
        ]
        subtotal = sum(line.net_amount_cents for line in lines)

        return TaxBreakdown(
            subtotal_amount_cents=subtotal,
            tax_total_amount_cents=0,
            total_amount_cents=subtotal,
            rounding_mode=RoundingMode.PER_LINE,
            lines=line_results,
            totals_by_kind={
                TaxCodeKind.EXEMPT: TaxKindTotals(
                    net_amount_cents=subtotal,
                    tax_amount_cents=0,
                    gross_amount_cents=subtotal,
                    rate_bps=0,
                ),
            },
            flags=TaxBreakdownFlags(
                needs_reverse_charge_note=False,
                is_small_business_no_vat_charged=True,
            ),
        )

    def _apply_standard_vat(
        self, lines: list[TaxLineInput], document_date: datetime, tenant_id: str
    ) -> TaxBreakdown:
        line_results: list[TaxLineResult] = []
        needs_reverse_charge = False

        for line in lines:
            kind = TaxCodeKind.STANDARD
            rate_bps = 0

            if line.tax_code_id is not None:
                tax_code = self.tax_code_repo.get_by_id(line.tax_code_id, tenant_id)
                if tax_code is None:
                    logger.warning(
                        "Tax code %s not found for tenant %s, line %s taxed at 0",
                        line.tax_code_id,
                        tenant_id,
                        line.id,
                    )
                else:
                    kind = TaxCodeKind(tax_code.kind)
                    if requires_rate(kind):
                        rate_bps = self.get_rate_bps(line.tax_code_id, document_date, tenant_id)
                    elif needs_reverse_charge_note(kind):
                        needs_reverse_charge = True
            else:
                rate_bps = self.get_rate_bps(TaxCodeKind.STANDARD, document_date, tenant_id)

            tax_amount = calculate_tax_cents(line.net_amount_cents, rate_bps)
            line_results.append(
                TaxLineResult(
                    line_id=line.id,
                    tax_code_id=line.tax_code_id,
                    kind=kind,
                    rate_bps=rate_bps,
                    net_amount_cents=line.net_amount_cents,
                    tax_amount_cents=tax_amount,
                    gross_amount_cents=line.net_amount_cents + tax_amount,
                )
            )

        totals_by_kind: dict[TaxCodeKind, TaxKindTotals] = {}
        for result in line_results:
            bucket = totals_by_kind.setdefault(result.kind, TaxKindTotals(rate_bps=result.rate_bps))
            bucket.net_amount_cents += result.net_amount_cents
            bucket.tax_amount_cents += result.tax_amount_cents
            bucket.gross_amount_cents += result.gross_amount_cents

        subtotal = sum(r.net_amount_cents for r in line_results)
        tax_total = sum(r.tax_amount_cents for r in line_results)

        return TaxBreakdown(
            subtotal_amount_cents=subtotal,
            tax_total_amount_cents=tax_total,
            total_amount_cents=subtotal + tax_total,
            rounding_mode=RoundingMode.PER_LINE,
            lines=line_results,
            totals_by_kind=totals_by_kind,
            flags=TaxBreakdownFlags(
                needs_reverse_charge_note=needs_reverse_charge,
                is_small_business_no_vat_charged=False,
            ),
        )
