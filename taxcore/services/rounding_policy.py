"""Deterministic cent rounding for tax amounts.

Tax authorities expect reproducible cent amounts, so every computation here
runs on ``Decimal`` and ties are always broken toward positive infinity
(10.5 -> 11, -10.5 -> -10), which is not Python's banker's rounding nor
``ROUND_HALF_UP``.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field
from decimal import ROUND_FLOOR, Decimal

from taxcore.models.tax_snapshot import RoundingMode

BASIS_POINTS_DIVISOR = Decimal("10000")
_HALF = Decimal("0.5")


@dataclass
class RoundingResult:
    """Rounded document total plus the individually rounded line amounts."""

    rounded_total: int
    line_rounded: list[int] = field(default_factory=list)


def _to_decimal(amount: int | float | Decimal) -> Decimal:
    if isinstance(amount, Decimal):
        return amount
    return Decimal(str(amount))


def round_cents(amount: int | float | Decimal) -> int:
    """Round to the nearest whole cent, halves toward positive infinity."""
    return int((_to_decimal(amount) + _HALF).to_integral_value(rounding=ROUND_FLOOR))


def calculate_tax_cents(net_amount_cents: int, rate_bps: int) -> int:
    """Tax on a net amount at a rate in basis points, rounded to cents."""
    exact = Decimal(net_amount_cents) * Decimal(rate_bps) / BASIS_POINTS_DIVISOR
    return round_cents(exact)


def apply_rounding_mode(
    mode: RoundingMode | str, line_taxes: Sequence[int | float | Decimal]
) -> RoundingResult:
    """Round a set of exact line taxes according to *mode*.

    PER_DOCUMENT rounds the exact sum for the total but still reports each
    line rounded on its own, so ``sum(line_rounded)`` can differ from
    ``rounded_total`` by a cent or more.
    """
    line_rounded = [round_cents(tax) for tax in line_taxes]

    if RoundingMode(mode) == RoundingMode.PER_LINE:
        return RoundingResult(rounded_total=sum(line_rounded), line_rounded=line_rounded)

    exact_total = sum((_to_decimal(tax) for tax in line_taxes), Decimal("0"))
    return RoundingResult(rounded_total=round_cents(exact_total), line_rounded=line_rounded)
