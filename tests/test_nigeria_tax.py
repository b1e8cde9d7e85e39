"""
Unit Tests for the Nigerian Personal Income Tax Calculator

Tests the full pipeline (aggregation, reliefs, bands, report) and the
calculator registry.

Copyright (c) 2026 Andreas Wagner. All rights reserved.
"""

import pytest
from decimal import Decimal
from types import SimpleNamespace

from lib.parsers.statement_transaction import Transaction, TransactionType
from calculators.engine import calculate_tax
from calculators.tax_calculators import (
    IncomeTaxCalculator,
    NigeriaIncomeTaxCalculator,
    get_calculator,
    list_available_jurisdictions,
)


def make_txn(txn_id: str, amount, date: str = "2026-01-15") -> Transaction:
    amount = Decimal(str(amount))
    return Transaction(
        id=txn_id,
        date=date,
        amount=amount,
        type=TransactionType.from_amount(amount),
        description=f"Test {txn_id}",
    )


class TestCalculatorRegistry:
    """Test the calculator factory and registration system."""

    def test_get_nigeria_calculator(self):
        calc = get_calculator("NG")
        assert isinstance(calc, NigeriaIncomeTaxCalculator)
        assert isinstance(calc, IncomeTaxCalculator)
        assert calc.get_jurisdiction_code() == "NG"
        assert calc.get_jurisdiction_name() == "Nigeria"

    def test_case_insensitive_lookup(self):
        assert type(get_calculator("ng")) == type(get_calculator("NG"))

    def test_invalid_jurisdiction_raises_error(self):
        with pytest.raises(ValueError, match="not found"):
            get_calculator("XX")

    def test_calculate_tax_rejects_unknown_jurisdiction(self):
        with pytest.raises(ValueError, match="not found"):
            calculate_tax([], jurisdiction="XX")

    def test_list_available_jurisdictions(self):
        assert "NG" in list_available_jurisdictions()

    def test_get_bands_returns_the_table(self):
        bands = get_calculator("NG").get_bands()

        assert bands == tuple(NigeriaIncomeTaxCalculator.TAX_BANDS)
        assert bands[-1].is_unbounded
        assert [b.rate for b in bands][:2] == [Decimal("0.00"), Decimal("0.15")]


class TestWorkedScenario:
    """
    Scenario:
    - One credit of ₦6,000,000, rent ₦2,000,000, no manual income
    - Pension 8% = 480,000; rent relief 20% = 400,000 (cap not reached)
    - Chargeable 5,120,000 -> 0 + 330,000 + 381,600 = 711,600
    """

    @pytest.fixture
    def result(self):
        return calculate_tax([make_txn("T1", 6_000_000)], annual_rent=2_000_000, manual_income=0)

    def test_income_and_reliefs(self, result):
        assert result.gross_income == Decimal("6000000")
        assert result.total_income == Decimal("6000000")
        assert result.pension == Decimal("480000")
        assert result.rent_relief == Decimal("400000")
        assert result.total_reliefs == Decimal("880000")
        assert result.chargeable_income == Decimal("5120000")

    def test_tax_payable(self, result):
        assert result.tax_payable == Decimal("711600")

    def test_effective_rate(self, result):
        assert result.effective_tax_rate == Decimal("11.86")

    def test_band_breakdown(self, result):
        taxable = [band.taxable_amount for band in result.breakdown]
        taxes = [band.tax_amount for band in result.breakdown]

        assert len(result.breakdown) == 6
        assert taxable == [
            Decimal("800000"), Decimal("2200000"), Decimal("2120000"),
            Decimal(0), Decimal(0), Decimal(0),
        ]
        assert taxes == [
            Decimal(0), Decimal("330000"), Decimal("381600"),
            Decimal(0), Decimal(0), Decimal(0),
        ]

    def test_metadata(self, result):
        assert result.jurisdiction == "NG"
        assert result.calculator_version == NigeriaIncomeTaxCalculator.CALCULATOR_VERSION


class TestZeroIncome:
    """Zero gross income short-circuits to an all-zero report."""

    def test_empty_inputs(self):
        result = calculate_tax([], 0, 0)

        for value in (
            result.total_income, result.total_expense, result.gross_income,
            result.pension, result.rent_relief, result.total_reliefs,
            result.chargeable_income, result.tax_payable, result.effective_tax_rate,
        ):
            assert value == 0

    def test_zero_breakdown_keeps_table_shape(self):
        result = calculate_tax([], 0, 0)

        assert len(result.breakdown) == len(NigeriaIncomeTaxCalculator.TAX_BANDS)
        assert all(b.taxable_amount == 0 and b.tax_amount == 0 for b in result.breakdown)
        assert result.breakdown[0].min == 0
        assert result.breakdown[0].max == Decimal("800000")
        assert result.breakdown[-1].max is None

    def test_expenses_only_are_still_reported(self):
        """Rent without income gives no relief; outflows remain visible."""
        result = calculate_tax([make_txn("D1", -25_000), make_txn("D2", -5_000)], annual_rent=1_000_000)

        assert result.total_expense == Decimal("30000")
        assert result.gross_income == 0
        assert result.rent_relief == 0
        assert result.tax_payable == 0


class TestReliefCap:
    """Rent relief is the lesser of 20% of rent or ₦500,000."""

    def test_cap_binds(self):
        result = calculate_tax([make_txn("T1", 20_000_000)], annual_rent=10_000_000)
        assert result.rent_relief == Decimal("500000")

    def test_cap_does_not_bind(self):
        result = calculate_tax([make_txn("T1", 20_000_000)], annual_rent=1_000_000)
        assert result.rent_relief == Decimal("200000")

    def test_exactly_at_cap(self):
        result = calculate_tax([make_txn("T1", 20_000_000)], annual_rent=2_500_000)
        assert result.rent_relief == Decimal("500000")


class TestIncomeComposition:
    """Gross income = positive transaction amounts + manual income."""

    def test_expenses_do_not_reduce_chargeable_income(self):
        with_expense = calculate_tax([make_txn("C1", 5_000_000), make_txn("D1", -3_000_000)])
        without_expense = calculate_tax([make_txn("C1", 5_000_000)])

        assert with_expense.total_expense == Decimal("3000000")
        assert with_expense.chargeable_income == without_expense.chargeable_income
        assert with_expense.tax_payable == without_expense.tax_payable

    def test_manual_income_only(self):
        result = calculate_tax([], annual_rent=0, manual_income=1_000_000)

        assert result.gross_income == Decimal("1000000")
        assert result.pension == Decimal("80000")
        assert result.chargeable_income == Decimal("920000")
        # 120,000 above the 0% band at 15%
        assert result.tax_payable == Decimal("18000")

    def test_manual_income_adds_to_transactions(self):
        result = calculate_tax([make_txn("C1", 2_000_000)], manual_income="1,000,000")
        assert result.gross_income == Decimal("3000000")

    def test_order_of_transactions_is_irrelevant(self):
        txns = [make_txn("A", 1_000_000), make_txn("B", -200_000), make_txn("C", 4_500_000.5)]

        forward = calculate_tax(txns, 300_000)
        backward = calculate_tax(list(reversed(txns)), 300_000)

        assert forward == backward

    def test_top_band_reached(self):
        result = calculate_tax([], manual_income=100_000_000)

        # 100m - 8m pension = 92m chargeable; 42m lands in the 25% band
        assert result.chargeable_income == Decimal("92000000")
        top = result.breakdown[-1]
        assert top.min == Decimal("50000000")
        assert top.max is None
        assert top.taxable_amount == Decimal("42000000")
        assert top.tax_amount == Decimal("10500000")
        # 0 + 330,000 + 1,620,000 + 2,730,000 + 5,750,000 + 10,500,000
        assert result.tax_payable == Decimal("20930000")


class TestInputPolicy:
    """Negative, missing and non-finite adjustments are clamped to zero."""

    def test_negative_rent_gives_no_relief(self):
        result = calculate_tax([make_txn("C1", 5_000_000)], annual_rent=-1_000_000)
        assert result.rent_relief == 0

    def test_negative_manual_income_is_ignored(self):
        clamped = calculate_tax([make_txn("C1", 5_000_000)], manual_income=-2_000_000)
        baseline = calculate_tax([make_txn("C1", 5_000_000)])
        assert clamped == baseline

    @pytest.mark.parametrize("bad", [float("nan"), float("inf"), "NaN", None])
    def test_non_finite_or_missing_adjustments(self, bad):
        result = calculate_tax([make_txn("C1", 5_000_000)], annual_rent=bad, manual_income=bad)

        assert result.gross_income == Decimal("5000000")
        assert result.rent_relief == 0
        assert result.tax_payable.is_finite()

    def test_non_numeric_adjustment_raises(self):
        with pytest.raises(ValueError, match="Invalid amount"):
            calculate_tax([], annual_rent="lots")

    def test_non_finite_transaction_amount_is_skipped(self):
        # Any object with id and amount is accepted, not only validated Transactions
        broken = SimpleNamespace(id="X", amount=Decimal("NaN"))
        result = calculate_tax([make_txn("C1", 1_000_000), broken])
        assert result.gross_income == Decimal("1000000")


class TestIdempotence:

    def test_same_inputs_same_result(self):
        txns = [make_txn("C1", 7_345_120.55), make_txn("D1", -120_000)]

        first = calculate_tax(txns, 1_200_000, 250_000)
        second = calculate_tax(txns, 1_200_000, 250_000)

        assert first == second
        assert first.fingerprint() == second.fingerprint()

    def test_fingerprint_changes_with_inputs(self):
        txns = [make_txn("C1", 7_345_120.55)]
        assert calculate_tax(txns, 0).fingerprint() != calculate_tax(txns, 1_000_000).fingerprint()

    def test_result_is_immutable(self):
        result = calculate_tax([make_txn("C1", 1_000_000)])
        with pytest.raises(Exception):
            result.tax_payable = Decimal(0)
