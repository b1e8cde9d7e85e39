"""Statement parsers and the shared Transaction model."""

from .statement_transaction import Transaction, TransactionType, TransactionTypeError
from .statement_parser import StatementParser

__all__ = [
    "Transaction",
    "TransactionType",
    "TransactionTypeError",
    "StatementParser",
]
