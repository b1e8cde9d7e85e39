"""
In-Memory Transaction Ledger

Holds the transactions extracted from uploaded statements for one session:
- Append with id-based deduplication
- Note annotation (the only editable field)
- Removal of every transaction that came from one source file
- Search / filter / sort for display
- Tax report over the current contents

Nothing is persisted; the ledger lives as long as the caller keeps it.

Copyright (c) 2026 Andreas Wagner. All rights reserved.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, Iterable, List, Optional

from lib.parsers.statement_transaction import Transaction, TransactionType
from calculators.engine import calculate_tax, DEFAULT_JURISDICTION
from calculators.tax_models import TaxCalculationResult
from utils.logging_config import setup_logger

logger = setup_logger(__name__)


@dataclass
class ImportResult:
    """Result of adding transactions to the ledger."""

    added: int
    skipped: int
    total_count: int


class TransactionLedger:
    """Ordered collection of statement transactions keyed by id."""

    def __init__(self, transactions: Optional[Iterable[Transaction]] = None):
        self._transactions: Dict[str, Transaction] = {}
        if transactions:
            self.add(transactions)

    def __len__(self) -> int:
        return len(self._transactions)

    def __iter__(self):
        return iter(list(self._transactions.values()))

    def __contains__(self, transaction_id: str) -> bool:
        return transaction_id in self._transactions

    @property
    def transactions(self) -> List[Transaction]:
        """Snapshot in insertion order."""
        return list(self._transactions.values())

    def get(self, transaction_id: str) -> Transaction:
        return self._transactions[transaction_id]

    def add(self, transactions: Iterable[Transaction]) -> ImportResult:
        """
        Append transactions, skipping ids that are already present.

        Returns:
            ImportResult with added/skipped counts
        """
        added = 0
        skipped = 0

        for txn in transactions:
            if txn.id in self._transactions:
                skipped += 1
                logger.debug(f"Skipping duplicate transaction id {txn.id}")
                continue
            self._transactions[txn.id] = txn
            added += 1

        if skipped:
            logger.info(f"Ledger import: {added} added, {skipped} duplicate(s) skipped")

        return ImportResult(added=added, skipped=skipped, total_count=len(self._transactions))

    def update_note(self, transaction_id: str, note: str) -> Transaction:
        """
        Replace the note of one transaction.

        Raises:
            KeyError: If no transaction has this id
        """
        if transaction_id not in self._transactions:
            raise KeyError(f"Unknown transaction id: {transaction_id}")

        updated = self._transactions[transaction_id].with_note(note)
        self._transactions[transaction_id] = updated
        return updated

    def remove_file(self, source_file_id: str) -> int:
        """Drop every transaction imported from one file. Returns the count removed."""
        to_remove = [
            txn_id for txn_id, txn in self._transactions.items()
            if txn.source_file_id == source_file_id
        ]
        for txn_id in to_remove:
            del self._transactions[txn_id]

        logger.info(f"Removed {len(to_remove)} transactions from file {source_file_id}")
        return len(to_remove)

    def clear(self) -> None:
        self._transactions.clear()

    def search(
        self,
        text: str = "",
        type_filter: str = "all",
        newest_first: bool = True
    ) -> List[Transaction]:
        """
        Filter by description/note text and direction, sorted by date.

        Args:
            text: Case-insensitive substring matched against description and note
            type_filter: 'all', 'credit' or 'debit'
            newest_first: Sort descending by date when True

        Raises:
            TransactionTypeError: If type_filter is not 'all' and not a known type
        """
        needle = (text or "").lower()
        wanted = None if type_filter == "all" else TransactionType.normalize(type_filter)

        matches = [
            txn for txn in self._transactions.values()
            if (needle in txn.description.lower() or needle in txn.note.lower())
            and (wanted is None or txn.type == wanted)
        ]

        return sorted(matches, key=lambda t: t.date, reverse=newest_first)

    def summarize(
        self,
        annual_rent=Decimal(0),
        manual_income=Decimal(0),
        jurisdiction: str = DEFAULT_JURISDICTION
    ) -> TaxCalculationResult:
        """Tax report over the ledger's current contents."""
        return calculate_tax(
            self.transactions,
            annual_rent=annual_rent,
            manual_income=manual_income,
            jurisdiction=jurisdiction,
        )
