"""
Unit Tests for the Progressive Band Allocator and Relief Calculator

Copyright (c) 2026 Andreas Wagner. All rights reserved.
"""

import pytest
from decimal import Decimal
from types import SimpleNamespace

from calculators.band_allocator import allocate_bands, validate_band_table, zero_breakdown
from calculators.income_aggregator import aggregate_transactions
from calculators.reliefs import calculate_reliefs, chargeable_income
from calculators.tax_models import TaxBand
from calculators.tax_calculators import NigeriaIncomeTaxCalculator


BANDS = NigeriaIncomeTaxCalculator.TAX_BANDS


class TestBandEdges:
    """Allocation exactly at and just above band boundaries."""

    def test_top_of_zero_band_is_tax_free(self):
        allocation = allocate_bands(Decimal("800000"), BANDS)
        assert allocation.tax_payable == 0
        assert allocation.breakdown[0].taxable_amount == Decimal("800000")
        assert allocation.breakdown[1].taxable_amount == 0

    def test_one_naira_above_zero_band(self):
        allocation = allocate_bands(Decimal("800001"), BANDS)
        assert allocation.tax_payable == Decimal("0.15")
        assert allocation.breakdown[1].taxable_amount == Decimal("1")

    def test_exact_cumulative_bound(self):
        allocation = allocate_bands(Decimal("3000000"), BANDS)
        assert allocation.tax_payable == Decimal("330000")
        assert allocation.breakdown[2].taxable_amount == 0

    def test_zero_income(self):
        allocation = allocate_bands(Decimal(0), BANDS)
        assert allocation.tax_payable == 0
        assert len(allocation.breakdown) == len(BANDS)

    def test_negative_input_is_floored(self):
        allocation = allocate_bands(Decimal("-5"), BANDS)
        assert allocation.tax_payable == 0
        assert all(b.taxable_amount == 0 for b in allocation.breakdown)


class TestBreakdownShape:
    """Every configured band is emitted, in order, even when unreached."""

    def test_bounds_follow_the_table(self):
        allocation = allocate_bands(Decimal("1000"), BANDS)

        bounds = [(b.min, b.max) for b in allocation.breakdown]
        assert bounds == [
            (Decimal("0"), Decimal("800000")),
            (Decimal("800000"), Decimal("3000000")),
            (Decimal("3000000"), Decimal("12000000")),
            (Decimal("12000000"), Decimal("25000000")),
            (Decimal("25000000"), Decimal("50000000")),
            (Decimal("50000000"), None),
        ]

    def test_rates_follow_the_table(self):
        allocation = allocate_bands(Decimal("1000"), BANDS)
        assert [b.rate for b in allocation.breakdown] == [band.rate for band in BANDS]

    def test_zero_breakdown_matches_allocation_of_zero(self):
        assert zero_breakdown(BANDS) == allocate_bands(Decimal(0), BANDS).breakdown

    def test_single_unbounded_band(self):
        allocation = allocate_bands(Decimal("1000"), [TaxBand(width=None, rate=Decimal("0.1"))])
        assert allocation.tax_payable == Decimal("100")
        assert allocation.breakdown[0].max is None


class TestBandTableValidation:

    def test_nigeria_table_is_valid(self):
        validate_band_table(BANDS)

    def test_empty_table(self):
        with pytest.raises(ValueError, match="at least one band"):
            validate_band_table([])

    def test_unbounded_band_must_be_last(self):
        bands = [TaxBand(None, Decimal("0.1")), TaxBand(None, Decimal("0.2"))]
        with pytest.raises(ValueError, match="Only the last band"):
            validate_band_table(bands)

    def test_last_band_must_be_unbounded(self):
        with pytest.raises(ValueError, match="Last band must be unbounded"):
            validate_band_table([TaxBand(Decimal("100"), Decimal("0.1"))])

    def test_width_must_be_positive(self):
        bands = [TaxBand(Decimal("0"), Decimal("0.1")), TaxBand(None, Decimal("0.2"))]
        with pytest.raises(ValueError, match="width must be positive"):
            validate_band_table(bands)

    def test_rate_must_be_a_fraction(self):
        bands = [TaxBand(Decimal("100"), Decimal("15")), TaxBand(None, Decimal("0.2"))]
        with pytest.raises(ValueError, match="rate must be between 0 and 1"):
            validate_band_table(bands)


class TestReliefs:

    RATES = dict(
        pension_rate=Decimal("0.08"),
        rent_relief_rate=Decimal("0.20"),
        rent_relief_cap=Decimal("500000"),
    )

    def test_pension_is_uncapped(self):
        reliefs = calculate_reliefs(Decimal("1000000000"), Decimal(0), **self.RATES)
        assert reliefs.pension == Decimal("80000000")
        assert reliefs.rent_relief == 0

    def test_rent_cap(self):
        reliefs = calculate_reliefs(Decimal("6000000"), Decimal("10000000"), **self.RATES)
        assert reliefs.rent_relief == Decimal("500000")
        assert reliefs.total_reliefs == Decimal("980000")

    def test_zero_gross_income_gives_no_relief(self):
        reliefs = calculate_reliefs(Decimal(0), Decimal("1000000"), **self.RATES)
        assert reliefs.total_reliefs == 0

    def test_chargeable_income_floored_at_zero(self):
        reliefs = calculate_reliefs(Decimal("100000"), Decimal("2500000"), **self.RATES)
        # 100,000 - (8,000 + 500,000) would be negative
        assert chargeable_income(Decimal("100000"), reliefs) == 0


class TestAggregator:

    def test_empty(self):
        summary = aggregate_transactions([])
        assert summary.total_income == 0
        assert summary.total_expense == 0

    def test_partition_by_sign(self):
        txns = [
            SimpleNamespace(id="1", amount=Decimal("100.50")),
            SimpleNamespace(id="2", amount=Decimal("-40.25")),
            SimpleNamespace(id="3", amount=Decimal("0")),
            SimpleNamespace(id="4", amount=Decimal("-9.75")),
        ]
        summary = aggregate_transactions(txns)

        assert summary.total_income == Decimal("100.50")
        assert summary.total_expense == Decimal("50.00")

    def test_infinite_amount_skipped(self):
        txns = [
            SimpleNamespace(id="1", amount=Decimal("100")),
            SimpleNamespace(id="2", amount=Decimal("-Infinity")),
        ]
        summary = aggregate_transactions(txns)

        assert summary.total_income == Decimal("100")
        assert summary.total_expense == 0
