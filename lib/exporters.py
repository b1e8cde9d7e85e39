"""
Report and Transaction Exporters

CSV and plain-text renderings of the transaction list and the tax report.
Rounding to two decimals happens here, never inside the engine.
"""

from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Optional

import pandas as pd

from lib.parsers.statement_transaction import Transaction
from calculators.tax_models import TaxBandResult, TaxCalculationResult

CENT = Decimal("0.01")


def format_amount(val: Decimal) -> str:
    """1234.5 -> '1,234.50'"""
    return f"{Decimal(val).quantize(CENT, rounding=ROUND_HALF_UP):,.2f}"


def format_naira(val: Decimal) -> str:
    return f"₦{format_amount(val)}"


def format_rate(rate: Decimal) -> str:
    """Band rate as a whole percentage: 0.15 -> '15%'"""
    return f"{rate * 100:.0f}%"


def format_band_range(band: TaxBandResult) -> str:
    if band.max is None:
        return f"> {format_amount(band.min)}"
    return f"{format_amount(band.min)} - {format_amount(band.max)}"


def export_filename(prefix: str, today: Optional[date] = None, extension: str = "csv") -> str:
    """e.g. transactions_export_2026-01-31.csv"""
    today = today or date.today()
    return f"{prefix}_{today.isoformat()}.{extension}"


def transactions_to_csv(transactions: Iterable[Transaction]) -> str:
    """
    CSV of transactions with columns Date, Type, Amount, Description, Note.

    Amounts are written as absolute values; the Type column carries the direction.
    """
    rows = [
        {
            "Date": txn.date,
            "Type": txn.type.value,
            "Amount": f"{abs(txn.amount).quantize(CENT, rounding=ROUND_HALF_UP):.2f}",
            "Description": txn.description,
            "Note": txn.note,
        }
        for txn in transactions
    ]
    df = pd.DataFrame(rows, columns=["Date", "Type", "Amount", "Description", "Note"])
    return df.to_csv(index=False, lineterminator="\n")


def breakdown_dataframe(result: TaxCalculationResult) -> pd.DataFrame:
    """One row per band, in table order."""
    return pd.DataFrame(
        [
            {
                "Band": format_band_range(band),
                "Rate": format_rate(band.rate),
                "Taxable Amount": format_amount(band.taxable_amount),
                "Tax": format_amount(band.tax_amount),
            }
            for band in result.breakdown
        ],
        columns=["Band", "Rate", "Taxable Amount", "Tax"],
    )


def summary_dataframe(result: TaxCalculationResult) -> pd.DataFrame:
    items = [
        ("Total Income", format_amount(result.total_income)),
        ("Total Expense", format_amount(result.total_expense)),
        ("Gross Income", format_amount(result.gross_income)),
        ("Pension Relief", format_amount(result.pension)),
        ("Rent Relief", format_amount(result.rent_relief)),
        ("Total Reliefs", format_amount(result.total_reliefs)),
        ("Chargeable Income", format_amount(result.chargeable_income)),
        ("Tax Payable", format_amount(result.tax_payable)),
        ("Effective Tax Rate", f"{format_amount(result.effective_tax_rate)}%"),
    ]
    return pd.DataFrame(items, columns=["Item", "Value"])


def report_to_csv(result: TaxCalculationResult) -> str:
    """Summary table, a blank line, then the band breakdown table."""
    summary_csv = summary_dataframe(result).to_csv(index=False, lineterminator="\n")
    breakdown_csv = breakdown_dataframe(result).to_csv(index=False, lineterminator="\n")
    return f"{summary_csv}\n{breakdown_csv}"


def format_summary(result: TaxCalculationResult) -> str:
    """Plain-text report for terminals and logs."""
    lines = [
        f"Personal Income Tax Estimate ({result.jurisdiction})",
        "=" * 52,
        f"{'Gross Income':<34}{format_naira(result.gross_income):>18}",
        f"{'Pension Relief':<34}{format_naira(result.pension):>18}",
        f"{'Rent Relief':<34}{format_naira(result.rent_relief):>18}",
        f"{'Chargeable Income':<34}{format_naira(result.chargeable_income):>18}",
        f"{'Total Outflow (informational)':<34}{format_naira(result.total_expense):>18}",
        "-" * 52,
        f"{'Tax Payable':<34}{format_naira(result.tax_payable):>18}",
        f"{'Effective Tax Rate':<34}{format_amount(result.effective_tax_rate) + '%':>18}",
        "",
        "Band breakdown:",
    ]

    for band in result.breakdown:
        lines.append(
            f"  {format_band_range(band):<32}{format_rate(band.rate):>5}"
            f"{format_amount(band.taxable_amount):>18}{format_amount(band.tax_amount):>16}"
        )

    return "\n".join(lines)
