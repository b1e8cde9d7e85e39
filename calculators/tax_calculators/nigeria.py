"""
Nigerian Personal Income Tax Calculator (PIT, 2026 regime)

Implements the 2026 personal income tax rules:
- Pension relief: 8% of gross income (statutory contribution, uncapped)
- Rent relief: 20% of annual rent paid, capped at ₦500,000
- Progressive bands from 0% (first ₦800,000) up to 25% (above ₦50m)
- Expenses are reported but never reduce chargeable income

Copyright (c) 2026 Andreas Wagner. All rights reserved.
"""

from typing import List
from decimal import Decimal

from lib.parsers.statement_transaction import Transaction
from calculators.tax_models import TaxBand, TaxCalculationResult
from calculators.income_aggregator import aggregate_transactions
from calculators.reliefs import calculate_reliefs, chargeable_income
from calculators.band_allocator import allocate_bands, zero_breakdown
from calculators.tax_calculators.base import (
    IncomeTaxCalculator,
    coerce_adjustment,
    register_calculator,
)
from utils.logging_config import setup_logger

logger = setup_logger(__name__)


@register_calculator("NG")
class NigeriaIncomeTaxCalculator(IncomeTaxCalculator):
    """
    Tax calculator for Nigeria (Personal Income Tax, 2026 estimates).

    Key Rules:
    - Gross income = statement inflows + manually declared income
    - Reliefs = pension (8%) + min(20% of rent, ₦500,000)
    - Chargeable income = max(0, gross income - reliefs)
    - Six progressive bands, the last one unbounded
    """

    PENSION_RATE = Decimal("0.08")
    RENT_RELIEF_RATE = Decimal("0.20")
    RENT_RELIEF_CAP = Decimal("500000")

    TAX_BANDS = (
        TaxBand(width=Decimal("800000"), rate=Decimal("0.00")),     # 0 - 800k
        TaxBand(width=Decimal("2200000"), rate=Decimal("0.15")),    # 800k - 3m
        TaxBand(width=Decimal("9000000"), rate=Decimal("0.18")),    # 3m - 12m
        TaxBand(width=Decimal("13000000"), rate=Decimal("0.21")),   # 12m - 25m
        TaxBand(width=Decimal("25000000"), rate=Decimal("0.23")),   # 25m - 50m
        TaxBand(width=None, rate=Decimal("0.25")),                  # above 50m
    )

    CALCULATOR_VERSION = "2026.1-NG-PIT"

    def get_jurisdiction_name(self) -> str:
        """Return human-readable jurisdiction name."""
        return "Nigeria"

    def get_jurisdiction_code(self) -> str:
        """Return ISO jurisdiction code."""
        return "NG"

    def calculate(
        self,
        transactions: List[Transaction],
        annual_rent: Decimal = Decimal(0),
        manual_income: Decimal = Decimal(0),
    ) -> TaxCalculationResult:
        """
        Calculate Nigerian personal income tax.

        Args:
            transactions: Statement transactions; only ``amount`` is read
            annual_rent: Rent paid over the year; drives rent relief
            manual_income: Extra income declared outside the statements

        Returns:
            TaxCalculationResult with one breakdown row per band
        """
        annual_rent = coerce_adjustment(annual_rent, "annual_rent")
        manual_income = coerce_adjustment(manual_income, "manual_income")

        income = aggregate_transactions(transactions)
        gross_income = income.total_income + manual_income

        if gross_income == 0:
            return self._create_zero_result(income.total_expense)

        reliefs = calculate_reliefs(
            gross_income,
            annual_rent,
            pension_rate=self.PENSION_RATE,
            rent_relief_rate=self.RENT_RELIEF_RATE,
            rent_relief_cap=self.RENT_RELIEF_CAP,
        )
        chargeable = chargeable_income(gross_income, reliefs)
        allocation = allocate_bands(chargeable, self.get_bands())

        effective_rate = allocation.tax_payable / gross_income * 100

        logger.debug(
            f"NG PIT: gross={gross_income} reliefs={reliefs.total_reliefs} "
            f"chargeable={chargeable} tax={allocation.tax_payable}"
        )

        return TaxCalculationResult(
            total_income=gross_income,
            total_expense=income.total_expense,
            gross_income=gross_income,
            pension=reliefs.pension,
            rent_relief=reliefs.rent_relief,
            total_reliefs=reliefs.total_reliefs,
            chargeable_income=chargeable,
            tax_payable=allocation.tax_payable,
            effective_tax_rate=effective_rate,
            breakdown=allocation.breakdown,
            jurisdiction=self.get_jurisdiction_code(),
            calculator_version=self.CALCULATOR_VERSION,
        )

    def _create_zero_result(self, total_expense: Decimal) -> TaxCalculationResult:
        """Zero report for a period without income; expenses are still reported."""
        zero = Decimal(0)
        return TaxCalculationResult(
            total_income=zero,
            total_expense=total_expense,
            gross_income=zero,
            pension=zero,
            rent_relief=zero,
            total_reliefs=zero,
            chargeable_income=zero,
            tax_payable=zero,
            effective_tax_rate=zero,
            breakdown=zero_breakdown(self.get_bands()),
            jurisdiction=self.get_jurisdiction_code(),
            calculator_version=self.CALCULATOR_VERSION,
        )
