"""
Tax Report - Command Line Entry Point

Reads one or more statement CSV exports, computes the personal income tax
estimate and prints the report.

Usage:
    python tax_report.py statement.csv --rent 2000000
    python tax_report.py jan.csv feb.csv --manual-income 1500000 --report-out report.csv
    python tax_report.py statement.csv --json

Environment:
    LOG_LEVEL         DEBUG, INFO (default), WARNING, ERROR
    LOG_FILE          Optional log file path
    TAX_JURISDICTION  Calculator code (default NG)

Copyright (c) 2026 Andreas Wagner. All rights reserved.
"""

import argparse
import json
import os
import sys
from pathlib import Path
from typing import List, Optional

from calculators.engine import DEFAULT_JURISDICTION
from core.hashing import canonical_json_dumps, create_audit_entry
from lib.exporters import format_summary, report_to_csv, transactions_to_csv
from lib.ledger import TransactionLedger
from lib.parsers.statement_parser import StatementParser
from utils.logging_config import setup_logger

logger = setup_logger(__name__, log_file=os.getenv('LOG_FILE'))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Personal income tax estimate from bank statement CSV exports",
    )
    parser.add_argument("statements", nargs="+", help="Statement CSV file(s)")
    parser.add_argument("--rent", default="0", help="Annual rent paid")
    parser.add_argument("--manual-income", default="0", help="Income not shown on the statements")
    parser.add_argument(
        "--jurisdiction",
        default=os.getenv('TAX_JURISDICTION', DEFAULT_JURISDICTION),
        help="Tax calculator code (default: NG)",
    )
    parser.add_argument("--transactions-out", help="Write the parsed transactions to this CSV file")
    parser.add_argument("--report-out", help="Write the tax report to this CSV file")
    parser.add_argument("--json", action="store_true", help="Print a sealed JSON report instead of text")
    return parser


def load_statements(paths: List[str]) -> TransactionLedger:
    """Parse every statement into one ledger; the file name is the source id."""
    ledger = TransactionLedger()
    statement_parser = StatementParser()

    for path in paths:
        content = Path(path).read_text(encoding='utf-8', errors='replace')
        transactions = statement_parser.parse_csv(content, source_file_id=Path(path).name)
        result = ledger.add(transactions)
        logger.info(
            f"{path}: {result.added} transactions added, {result.skipped} skipped, "
            f"{len(statement_parser.errors)} rows rejected"
        )

    return ledger


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        ledger = load_statements(args.statements)
        result = ledger.summarize(
            annual_rent=args.rent,
            manual_income=args.manual_income,
            jurisdiction=args.jurisdiction,
        )

        if args.transactions_out:
            Path(args.transactions_out).write_text(transactions_to_csv(ledger.transactions), encoding='utf-8')
            logger.info(f"Transactions written to {args.transactions_out}")

        if args.report_out:
            Path(args.report_out).write_text(report_to_csv(result), encoding='utf-8')
            logger.info(f"Report written to {args.report_out}")
    except (OSError, ValueError) as e:
        logger.error(f"Could not produce tax report: {e}")
        return 1

    if args.json:
        entry = create_audit_entry(
            event_id=result.fingerprint(),
            inputs={
                "statements": [Path(p).name for p in args.statements],
                "transaction_count": len(ledger),
                "annual_rent": args.rent,
                "manual_income": args.manual_income,
            },
            outputs=result.to_dict(),
        )
        print(json.dumps(json.loads(canonical_json_dumps(entry)), indent=2))
    else:
        print(format_summary(result))

    return 0


if __name__ == "__main__":
    sys.exit(main())
