"""Tests for the rounding policy."""

from decimal import Decimal

import pytest

from taxcore.models.tax_snapshot import RoundingMode
from taxcore.services.rounding_policy import (
    RoundingResult,
    apply_rounding_mode,
    calculate_tax_cents,
    round_cents,
)


class TestRoundCents:
    def test_rounds_half_up_for_positive_values(self):
        assert round_cents(10.5) == 11
        assert round_cents(10.4) == 10
        assert round_cents(10.6) == 11

    def test_rounds_half_toward_positive_infinity_for_negative_values(self):
        assert round_cents(-10.5) == -10
        assert round_cents(-10.4) == -10
        assert round_cents(-10.6) == -11

    def test_exact_integers_are_unchanged(self):
        assert round_cents(100) == 100
        assert round_cents(0) == 0
        assert round_cents(-100) == -100

    def test_accepts_decimal(self):
        assert round_cents(Decimal("2.5")) == 3
        assert round_cents(Decimal("-2.5")) == -2
        assert round_cents(Decimal("200.07")) == 200

    def test_differs_from_builtin_round(self):
        # Builtin round() uses banker's rounding
        assert round(2.5) == 2
        assert round_cents(2.5) == 3

    def test_returns_int(self):
        assert isinstance(round_cents(Decimal("1.5")), int)


class TestCalculateTaxCents:
    def test_standard_rate(self):
        assert calculate_tax_cents(10000, 1900) == 1900

    def test_reduced_rate(self):
        assert calculate_tax_cents(10000, 700) == 700

    def test_rounds_down_below_half(self):
        # 19% of 10.53 = 2.0007
        assert calculate_tax_cents(1053, 1900) == 200

    def test_rounds_half_cent_up(self):
        # 7% of 0.50 = 0.035 -> 3.5 cents
        assert calculate_tax_cents(50, 700) == 4

    def test_zero_rate(self):
        assert calculate_tax_cents(10000, 0) == 0

    def test_zero_amount(self):
        assert calculate_tax_cents(0, 1900) == 0

    def test_negative_amount(self):
        # -10.5 cents rounds toward positive infinity
        assert calculate_tax_cents(-150, 700) == -10

    def test_is_deterministic(self):
        results = {calculate_tax_cents(12345, 1900) for _ in range(100)}
        assert results == {2346}


class TestApplyRoundingMode:
    def test_per_line_rounds_each_line_and_sums(self):
        result = apply_rounding_mode(RoundingMode.PER_LINE, [100.4, 100.5, 100.6])

        assert isinstance(result, RoundingResult)
        assert result.line_rounded == [100, 101, 101]
        assert result.rounded_total == 302

    def test_per_document_rounds_exact_sum(self):
        result = apply_rounding_mode(RoundingMode.PER_DOCUMENT, [100.4, 100.4, 100.4])

        assert result.rounded_total == 301
        # Lines are still reported individually rounded
        assert result.line_rounded == [100, 100, 100]
        assert sum(result.line_rounded) != result.rounded_total

    def test_accepts_mode_string(self):
        result = apply_rounding_mode("PER_DOCUMENT", [Decimal("0.5"), Decimal("0.5")])
        assert result.rounded_total == 1
        assert result.line_rounded == [1, 1]

    def test_empty_lines(self):
        assert apply_rounding_mode(RoundingMode.PER_LINE, []).rounded_total == 0
        assert apply_rounding_mode(RoundingMode.PER_DOCUMENT, []).rounded_total == 0

    def test_unknown_mode_raises(self):
        with pytest.raises(ValueError):
            apply_rounding_mode("PER_INVOICE", [1.0])
