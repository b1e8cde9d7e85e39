"""
Progressive Band Allocator

Walks an ordered band table once, carrying the unallocated remainder from one
band to the next. Every configured band produces a row, reached or not, so
the breakdown always has the same length and order as the table.

Copyright (c) 2026 Andreas Wagner. All rights reserved.
"""

from decimal import Decimal
from typing import List, Sequence

from calculators.tax_models import BandAllocation, TaxBand, TaxBandResult


def validate_band_table(bands: Sequence[TaxBand]) -> None:
    """
    Check the structural rules of a band table.

    Raises:
        ValueError: If the table is empty, if any band other than the last is
            unbounded, if the last band is bounded, if a width is not
            positive, or if a rate lies outside [0, 1]
    """
    if not bands:
        raise ValueError("Band table must contain at least one band")

    for index, band in enumerate(bands):
        is_last = index == len(bands) - 1

        if band.is_unbounded and not is_last:
            raise ValueError(f"Only the last band may be unbounded (band {index})")
        if is_last and not band.is_unbounded:
            raise ValueError("Last band must be unbounded")
        if not band.is_unbounded and band.width <= 0:
            raise ValueError(f"Band {index} width must be positive, got {band.width}")
        if not Decimal(0) <= band.rate <= Decimal(1):
            raise ValueError(f"Band {index} rate must be between 0 and 1, got {band.rate}")


def allocate_bands(chargeable_income: Decimal, bands: Sequence[TaxBand]) -> BandAllocation:
    """
    Allocate chargeable income across progressive bands.

    Args:
        chargeable_income: Non-negative income subject to banded taxation
        bands: Ordered band table, last band unbounded

    Returns:
        BandAllocation with one TaxBandResult per band and the summed tax
    """
    remaining = max(Decimal(0), chargeable_income)
    lower_bound = Decimal(0)
    tax_payable = Decimal(0)
    breakdown: List[TaxBandResult] = []

    for band in bands:
        if band.is_unbounded:
            taxable_in_band = remaining
            upper_bound = None
        else:
            taxable_in_band = min(remaining, band.width)
            upper_bound = lower_bound + band.width

        tax_in_band = taxable_in_band * band.rate
        tax_payable += tax_in_band

        breakdown.append(TaxBandResult(
            min=lower_bound,
            max=upper_bound,
            rate=band.rate,
            taxable_amount=taxable_in_band,
            tax_amount=tax_in_band,
        ))

        # Keep walking after remaining hits zero; later bands report zeros
        remaining -= taxable_in_band
        if upper_bound is not None:
            lower_bound = upper_bound

    return BandAllocation(breakdown=tuple(breakdown), tax_payable=tax_payable)


def zero_breakdown(bands: Sequence[TaxBand]) -> tuple:
    """Zero-filled breakdown with the table's bounds and rates."""
    rows = []
    lower_bound = Decimal(0)

    for band in bands:
        upper_bound = None if band.is_unbounded else lower_bound + band.width
        rows.append(TaxBandResult(
            min=lower_bound,
            max=upper_bound,
            rate=band.rate,
            taxable_amount=Decimal(0),
            tax_amount=Decimal(0),
        ))
        if upper_bound is not None:
            lower_bound = upper_bound

    return tuple(rows)
