"""
Abstract Base Class for Income Tax Calculators

Defines the interface that all jurisdiction-specific personal income tax
calculators implement. Each calculator takes a list of statement
Transactions plus the declared adjustments and produces a
TaxCalculationResult.

Copyright (c) 2026 Andreas Wagner. All rights reserved.
"""

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import List, Dict, Type, Sequence

from lib.parsers.statement_transaction import Transaction, to_decimal
from calculators.tax_models import TaxBand, TaxCalculationResult
from calculators.band_allocator import validate_band_table
from utils.logging_config import setup_logger

logger = setup_logger(__name__)


def coerce_adjustment(value, name: str) -> Decimal:
    """
    Convert a declared adjustment (rent, manual income) to a usable Decimal.

    None, negative, NaN and infinite values are clamped to zero with a
    warning; unparseable strings raise ValueError.
    """
    amount = to_decimal(value)

    if not amount.is_finite():
        logger.warning(f"{name} is not finite ({value!r}); using 0")
        return Decimal(0)
    if amount < 0:
        logger.warning(f"{name} is negative ({amount}); using 0")
        return Decimal(0)

    return amount


class IncomeTaxCalculator(ABC):
    """
    Abstract base class for jurisdiction-specific income tax calculators.

    Subclasses declare their band table in ``TAX_BANDS``; it is validated
    once when the calculator is instantiated.
    """

    TAX_BANDS: Sequence[TaxBand] = ()

    def __init__(self):
        validate_band_table(self.TAX_BANDS)

    @abstractmethod
    def calculate(
        self,
        transactions: List[Transaction],
        annual_rent: Decimal = Decimal(0),
        manual_income: Decimal = Decimal(0),
    ) -> TaxCalculationResult:
        """
        Calculate the income tax report.

        Args:
            transactions: Extracted statement transactions (signed amounts)
            annual_rent: Rent paid over the year (non-negative)
            manual_income: Income declared outside the statements (non-negative)

        Returns:
            TaxCalculationResult with reliefs, chargeable income and band breakdown
        """
        pass

    @abstractmethod
    def get_jurisdiction_name(self) -> str:
        """
        Return the human-readable name of this tax jurisdiction.

        Returns:
            Jurisdiction name (e.g., "Nigeria")
        """
        pass

    @abstractmethod
    def get_jurisdiction_code(self) -> str:
        """
        Return the ISO-style code for this jurisdiction.

        Returns:
            Jurisdiction code (e.g., "NG")
        """
        pass

    def get_bands(self) -> Sequence[TaxBand]:
        return tuple(self.TAX_BANDS)


# Registry of available calculators
_CALCULATOR_REGISTRY: Dict[str, Type[IncomeTaxCalculator]] = {}


def register_calculator(jurisdiction_code: str):
    """
    Decorator to register a tax calculator class.

    Usage:
        @register_calculator("NG")
        class NigeriaIncomeTaxCalculator(IncomeTaxCalculator):
            ...
    """
    def decorator(cls: Type[IncomeTaxCalculator]):
        _CALCULATOR_REGISTRY[jurisdiction_code.upper()] = cls
        return cls
    return decorator


def get_calculator(jurisdiction_code: str) -> IncomeTaxCalculator:
    """
    Factory method to get a tax calculator instance.

    Args:
        jurisdiction_code: ISO code (e.g., "NG")

    Returns:
        Instance of the appropriate IncomeTaxCalculator subclass

    Raises:
        ValueError: If jurisdiction is not supported
    """
    code = jurisdiction_code.upper()

    if code not in _CALCULATOR_REGISTRY:
        available = ", ".join(sorted(_CALCULATOR_REGISTRY.keys()))
        raise ValueError(
            f"Tax calculator for '{jurisdiction_code}' not found. "
            f"Available: {available}"
        )

    return _CALCULATOR_REGISTRY[code]()


def list_available_jurisdictions() -> List[str]:
    """
    Get list of all supported tax jurisdictions.

    Returns:
        List of jurisdiction codes (e.g., ["NG"])
    """
    return sorted(_CALCULATOR_REGISTRY.keys())
