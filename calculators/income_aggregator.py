"""
Income/Expense Aggregator

Reduces a transaction list into total inflow and total outflow. Order of the
input does not matter; only the sign of ``amount`` is consulted.

Copyright (c) 2026 Andreas Wagner. All rights reserved.
"""

from decimal import Decimal
from typing import Iterable

from calculators.tax_models import IncomeSummary
from lib.parsers.statement_transaction import Transaction
from utils.logging_config import setup_logger

logger = setup_logger(__name__)


def aggregate_transactions(transactions: Iterable[Transaction]) -> IncomeSummary:
    """
    Sum inflows and outflows of a transaction list.

    Args:
        transactions: Statement transactions (signed amounts)

    Returns:
        IncomeSummary with total_income = sum of positive amounts and
        total_expense = sum of absolute negative amounts
    """
    total_income = Decimal(0)
    total_expense = Decimal(0)
    skipped = 0

    for transaction in transactions:
        amount = transaction.amount

        if not amount.is_finite():
            skipped += 1
            logger.warning(f"Skipping transaction {transaction.id}: non-finite amount {amount}")
            continue

        if amount > 0:
            total_income += amount
        elif amount < 0:
            total_expense += abs(amount)

    if skipped:
        logger.warning(f"{skipped} transaction(s) ignored during aggregation")

    return IncomeSummary(total_income=total_income, total_expense=total_expense)
