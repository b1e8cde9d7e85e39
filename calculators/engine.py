"""
Income Tax Engine - Single Entry Point

Runs the full pipeline (aggregate -> reliefs -> bands -> report) for a
jurisdiction. The engine is a pure function of its inputs: no caching, no
subscriptions, no I/O. Callers invoke it whenever they need a fresh report.

Copyright (c) 2026 Andreas Wagner. All rights reserved.
"""

from decimal import Decimal
from typing import Iterable, Union

from lib.parsers.statement_transaction import Transaction
from calculators.tax_models import TaxCalculationResult
from calculators.tax_calculators import get_calculator
from utils.logging_config import setup_logger, get_perf_logger

logger = setup_logger(__name__)

Amount = Union[Decimal, int, float, str, None]

DEFAULT_JURISDICTION = "NG"


def calculate_tax(
    transactions: Iterable[Transaction],
    annual_rent: Amount = 0,
    manual_income: Amount = 0,
    jurisdiction: str = DEFAULT_JURISDICTION,
) -> TaxCalculationResult:
    """
    Compute the personal income tax report.

    Args:
        transactions: Extracted statement transactions (signed amounts)
        annual_rent: Rent paid over the year; negative/NaN is treated as 0
        manual_income: Income declared outside the statements; negative/NaN is treated as 0
        jurisdiction: Registered calculator code (default "NG")

    Returns:
        Immutable TaxCalculationResult

    Raises:
        ValueError: If the jurisdiction is unknown or an adjustment is not numeric
    """
    calculator = get_calculator(jurisdiction)
    transactions = list(transactions)

    with get_perf_logger(logger, f"calculate_tax[{calculator.get_jurisdiction_code()}]", threshold_ms=250):
        result = calculator.calculate(
            transactions,
            annual_rent=annual_rent,
            manual_income=manual_income,
        )

    logger.info(
        f"Calculated {result.jurisdiction} tax over {len(transactions)} transactions: "
        f"chargeable={result.chargeable_income:,.2f} tax={result.tax_payable:,.2f}"
    )
    return result
