"""
Relief Calculator

Statutory pension relief and capped rent relief, both deducted from gross
income before the band walk.

Copyright (c) 2026 Andreas Wagner. All rights reserved.
"""

from decimal import Decimal

from calculators.tax_models import ReliefSummary


def calculate_reliefs(
    gross_income: Decimal,
    annual_rent: Decimal,
    pension_rate: Decimal,
    rent_relief_rate: Decimal,
    rent_relief_cap: Decimal,
) -> ReliefSummary:
    """
    Derive pension and rent relief.

    pension     = gross_income * pension_rate (uncapped)
    rent_relief = min(annual_rent * rent_relief_rate, rent_relief_cap)

    Negative rent contributes no relief.
    """
    if gross_income <= 0:
        return ReliefSummary()

    pension = gross_income * pension_rate

    rent_relief = Decimal(0)
    if annual_rent > 0:
        rent_relief = min(annual_rent * rent_relief_rate, rent_relief_cap)

    return ReliefSummary(pension=pension, rent_relief=rent_relief)


def chargeable_income(gross_income: Decimal, reliefs: ReliefSummary) -> Decimal:
    """Gross income less total reliefs, floored at zero."""
    return max(Decimal(0), gross_income - reliefs.total_reliefs)
