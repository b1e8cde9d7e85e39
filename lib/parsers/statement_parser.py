"""Bank statement parser with automatic format detection.

Produces signed Transactions from either a statement CSV export or the
records returned by the document extraction service.
"""

import csv
import uuid
from datetime import datetime
from decimal import Decimal, InvalidOperation
from difflib import get_close_matches, SequenceMatcher
from io import StringIO
from typing import List, Dict, Optional, Any, Iterable, Mapping
import pandas as pd

from lib.parsers.statement_transaction import (
    Transaction,
    TransactionType,
    to_decimal,
)
from utils.logging_config import setup_logger, log_dataframe_info

logger = setup_logger(__name__)


class StatementParser:
    """
    Flexible statement parser with automatic format detection.

    Handles:
    - Multiple delimiters (, ; | tab)
    - Column name variations (fuzzy matching)
    - One signed amount column, or separate credit/debit columns
    - Thousand separators and naira markers in amounts
    """

    # Column mapping templates
    COLUMN_MAPPINGS = {
        'date': ['date', 'transaction_date', 'trans_date', 'value_date', 'posting_date', 'txn_date'],
        'description': ['description', 'narration', 'details', 'remarks', 'particulars', 'memo'],
        'amount': ['amount', 'value', 'transaction_amount', 'amount_ngn'],
        'credit': ['credit', 'credits', 'money_in', 'deposit', 'deposits', 'inflow', 'credit_amount'],
        'debit': ['debit', 'debits', 'money_out', 'withdrawal', 'withdrawals', 'outflow', 'debit_amount'],
        'type': ['type', 'transaction_type', 'dr_cr', 'cr_dr', 'direction'],
        'note': ['note', 'notes', 'comment', 'annotation'],
        'reference': ['reference', 'ref', 'reference_id', 'transaction_id', 'id', 'ref_no'],
    }

    DATE_FORMATS = [
        '%Y-%m-%d',                 # ISO date
        '%Y-%m-%dT%H:%M:%S',        # ISO 8601
        '%d/%m/%Y',                 # Nigerian bank exports
        '%d-%m-%Y',
        '%d-%b-%Y',                 # 05-Jan-2026
        '%d %b %Y',                 # 05 Jan 2026
        '%m/%d/%Y',                 # US format
    ]

    def __init__(self):
        self.delimiter = None
        self.errors: List[str] = []

    def detect_delimiter(self, content: str) -> str:
        """Detect CSV delimiter from content."""
        first_line = content.split('\n')[0] if content else ''

        if first_line.count(';') > first_line.count(','):
            return ';'

        sniffer = csv.Sniffer()
        try:
            sample = '\n'.join(content.split('\n')[:5])
            dialect = sniffer.sniff(sample, delimiters=";,|\t")
            return dialect.delimiter
        except csv.Error:
            return ','

    def fuzzy_match_column(self, column_name: str, templates: List[str]) -> float:
        """
        Return the best match score for a column against templates.
        Returns: 0.0 to 1.0
        """
        column_lower = column_name.lower().strip().replace(' ', '_')

        if column_lower in templates:
            return 1.0

        matches = get_close_matches(column_lower, templates, n=1, cutoff=0.7)
        if matches:
            return SequenceMatcher(None, column_lower, matches[0]).ratio()

        return 0.0

    def map_columns(self, df: pd.DataFrame) -> Dict[str, str]:
        """
        Map actual column names to standardized names using a global best-match strategy.
        """
        column_map = {}
        assigned_columns = set()
        candidates = []

        for std_name, templates in self.COLUMN_MAPPINGS.items():
            for col in df.columns:
                score = self.fuzzy_match_column(col, templates)
                if score >= 0.8:  # Strict cutoff
                    candidates.append((score, std_name, col))

        # Highest scores claim their column first
        candidates.sort(key=lambda x: x[0], reverse=True)
        assigned_names = set()

        for score, std_name, col in candidates:
            if col in assigned_columns or std_name in assigned_names:
                continue
            column_map[col] = std_name
            assigned_columns.add(col)
            assigned_names.add(std_name)
            logger.info(f"Mapped '{col}' to '{std_name}' (score: {score:.2f})")

        logger.info(f"Final column mapping: {column_map}")
        return column_map

    def normalize_decimal(self, value: Any) -> Optional[Decimal]:
        """Convert a cell to Decimal; blank cells give None."""
        if value is None or pd.isna(value) or str(value).strip() in ('', '-'):
            return None

        val_str = str(value).strip()

        # Accounting negatives: (1,234.56)
        if val_str.startswith('(') and val_str.endswith(')'):
            val_str = '-' + val_str[1:-1]

        try:
            return to_decimal(val_str)
        except ValueError:
            raise ValueError(f"Could not parse amount: {value}")

    def parse_date(self, value: Any) -> Optional[str]:
        """Parse a date cell into an ISO date string."""
        if value is None or pd.isna(value) or str(value).strip() == '':
            return None

        val_str = str(value).strip()

        for fmt in self.DATE_FORMATS:
            try:
                return datetime.strptime(val_str, fmt).date().isoformat()
            except ValueError:
                continue

        logger.warning(f"Could not parse date: {value}")
        return None

    def signed_amount(self, row: Mapping[str, Any]) -> Decimal:
        """
        Derive the signed amount of a row.

        With a type column the sign follows the type; with credit/debit
        columns the debit side is negated.
        """
        amount = self.normalize_decimal(row.get('amount'))

        if amount is not None:
            type_val = row.get('type', '')
            if type_val is not None and str(type_val).strip():
                if TransactionType.normalize(type_val) == TransactionType.DEBIT:
                    return -abs(amount)
                return abs(amount)
            return amount

        credit = self.normalize_decimal(row.get('credit')) or Decimal(0)
        debit = self.normalize_decimal(row.get('debit')) or Decimal(0)

        if credit == 0 and debit == 0:
            raise ValueError("Row has no amount")

        return abs(credit) - abs(debit)

    def parse_csv(self, file_content: str, source_file_id: Optional[str] = None) -> List[Transaction]:
        """
        Parse statement CSV content into Transaction objects.

        Args:
            file_content: Raw CSV content as string
            source_file_id: Identifier of the uploaded file, stored on each transaction

        Returns:
            List of Transaction objects (rows that fail to parse are skipped)

        Raises:
            ValueError: If the date column or every amount column is missing
        """
        self.errors = []
        self.delimiter = self.detect_delimiter(file_content)
        logger.info(f"Detected delimiter: '{self.delimiter}'")

        def reject_line(bad_line: List[str]) -> None:
            self.errors.append(f"Malformed line: {self.delimiter.join(bad_line)}")
            logger.warning(f"Skipping malformed line with {len(bad_line)} fields: {bad_line}")
            return None

        df = pd.read_csv(
            StringIO(file_content),
            delimiter=self.delimiter,
            quotechar='"',
            dtype=str,  # Read everything as string initially
            keep_default_na=False,
            skipinitialspace=True,
            engine='python',  # Callable on_bad_lines needs the python engine
            on_bad_lines=reject_line
        )
        df.columns = df.columns.str.strip().str.strip('"')
        log_dataframe_info(logger, df, "Statement")

        df_mapped = df.rename(columns=self.map_columns(df))

        missing = []
        if 'date' not in df_mapped.columns:
            missing.append('date')
        if not {'amount', 'credit', 'debit'} & set(df_mapped.columns):
            missing.append('amount (or credit/debit)')
        if missing:
            raise ValueError(f"Missing required columns: {missing}")

        transactions = []

        for idx, row in df_mapped.iterrows():
            try:
                trans_date = self.parse_date(row.get('date'))
                if not trans_date:
                    self.errors.append(f"Row {idx}: Invalid date '{row.get('date')}'")
                    continue

                amount = self.signed_amount(row)

                transactions.append(Transaction(
                    id=str(uuid.uuid4()),
                    date=trans_date,
                    amount=amount,
                    type=TransactionType.from_amount(amount),
                    description=str(row.get('description', '') or '').strip(),
                    reference=str(row.get('reference', '') or '').strip(),
                    note=str(row.get('note', '') or '').strip(),
                    source_file_id=source_file_id,
                ))

            except (ValueError, InvalidOperation) as e:
                # TransactionTypeError and pydantic ValidationError are ValueErrors
                self.errors.append(f"Row {idx}: {e}")
                logger.warning(f"Failed to parse row {idx}: {e}")

        logger.info(f"Successfully parsed {len(transactions)} transactions, {len(self.errors)} errors")

        if len(self.errors) > 10:
            logger.warning(f"First 10 errors: {self.errors[:10]}")

        return transactions

    def from_extracted(
        self,
        records: Iterable[Mapping[str, Any]],
        source_file_id: Optional[str] = None
    ) -> List[Transaction]:
        """
        Normalize records returned by the document extraction service.

        Each record carries ``date``, ``description``, an absolute ``amount``
        and ``type`` ('credit' or 'debit'). Debits become negative amounts.
        Dates are normalized to ISO; records with an unreadable date are
        skipped and listed in ``errors``.

        Raises:
            TransactionTypeError: If a record has an unknown type
            ValueError: If a record amount is not numeric
        """
        self.errors = []
        transactions = []

        for idx, record in enumerate(records):
            trans_type = TransactionType.normalize(record.get('type', ''))
            amount = abs(to_decimal(record.get('amount')))
            if trans_type == TransactionType.DEBIT:
                amount = -amount

            trans_date = self.parse_date(record.get('date'))
            if not trans_date:
                self.errors.append(f"Record {idx}: Invalid date '{record.get('date')}'")
                continue

            transactions.append(Transaction(
                id=str(uuid.uuid4()),
                date=trans_date,
                amount=amount,
                type=trans_type,
                description=record.get('description') or '',
                reference=record.get('reference') or '',
                note='',
                source_file_id=source_file_id,
            ))

        logger.info(
            f"Normalized {len(transactions)} extracted transactions "
            f"(file={source_file_id}, {len(self.errors)} rejected)"
        )
        return transactions
