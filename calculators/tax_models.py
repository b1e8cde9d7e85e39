"""
Tax Data Models

Defines the data structures produced by the income tax engine:
- TaxBand: One row of a jurisdiction's progressive band table
- TaxBandResult: Allocation of chargeable income to one band
- IncomeSummary / ReliefSummary / BandAllocation: Intermediate pipeline results
- TaxCalculationResult: The complete, immutable report

Copyright (c) 2026 Andreas Wagner. All rights reserved.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional, Dict, Tuple, Any

from core.hashing import calculate_sha256


ZERO = Decimal(0)


@dataclass(frozen=True)
class TaxBand:
    """
    A contiguous income range taxed at a single rate.

    ``width`` of None marks the unbounded top band.
    """

    width: Optional[Decimal]
    rate: Decimal

    @property
    def is_unbounded(self) -> bool:
        return self.width is None


@dataclass(frozen=True)
class TaxBandResult:
    """Portion of chargeable income that fell into one band."""

    min: Decimal
    max: Optional[Decimal]  # None = unbounded
    rate: Decimal
    taxable_amount: Decimal
    tax_amount: Decimal

    def to_dict(self) -> Dict[str, Any]:
        return {
            "min": self.min,
            "max": self.max,
            "rate": self.rate,
            "taxable_amount": self.taxable_amount,
            "tax_amount": self.tax_amount,
        }


@dataclass(frozen=True)
class IncomeSummary:
    """Inflow/outflow totals of a transaction list."""

    total_income: Decimal = ZERO
    total_expense: Decimal = ZERO


@dataclass(frozen=True)
class ReliefSummary:
    """Reliefs deducted from gross income before banding."""

    pension: Decimal = ZERO
    rent_relief: Decimal = ZERO

    @property
    def total_reliefs(self) -> Decimal:
        return self.pension + self.rent_relief


@dataclass(frozen=True)
class BandAllocation:
    """Output of the progressive band walk."""

    breakdown: Tuple[TaxBandResult, ...]
    tax_payable: Decimal


@dataclass(frozen=True)
class TaxCalculationResult:
    """
    Complete income tax report.

    Fully derived from (transactions, annual rent, manual income) and never
    mutated; a change in any input produces a new instance.

    Key Invariants:
    - sum(b.taxable_amount for b in breakdown) == chargeable_income
    - sum(b.tax_amount for b in breakdown) == tax_payable
    - len(breakdown) == number of bands in the jurisdiction table
    """

    total_income: Decimal
    total_expense: Decimal
    gross_income: Decimal
    pension: Decimal
    rent_relief: Decimal
    total_reliefs: Decimal
    chargeable_income: Decimal
    tax_payable: Decimal
    effective_tax_rate: Decimal  # Percentage, e.g. 11.86 for 11.86%
    breakdown: Tuple[TaxBandResult, ...] = field(default_factory=tuple)

    jurisdiction: str = "NG"
    calculator_version: str = "1.0"

    def to_dict(self) -> Dict[str, Any]:
        """Plain dict of the report (Decimals kept), breakdown as a list of dicts."""
        return {
            "jurisdiction": self.jurisdiction,
            "calculator_version": self.calculator_version,
            "total_income": self.total_income,
            "total_expense": self.total_expense,
            "gross_income": self.gross_income,
            "pension": self.pension,
            "rent_relief": self.rent_relief,
            "total_reliefs": self.total_reliefs,
            "chargeable_income": self.chargeable_income,
            "tax_payable": self.tax_payable,
            "effective_tax_rate": self.effective_tax_rate,
            "breakdown": [band.to_dict() for band in self.breakdown],
        }

    def fingerprint(self) -> str:
        """SHA256 of the canonical serialization; equal inputs give equal fingerprints."""
        return calculate_sha256(self.to_dict())
