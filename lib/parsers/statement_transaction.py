"""
Statement Transaction Model

Defines the transaction model shared by the statement importers, the ledger
and the tax engine:
- Signed amounts (positive = inflow, negative = outflow)
- Credit/debit classification
- User-editable note (every other field is fixed at creation)

Copyright (c) 2026 Andreas Wagner. All rights reserved.
"""

from enum import Enum
from decimal import Decimal, InvalidOperation
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator


class TransactionTypeError(ValueError):
    """Raised when transaction type cannot be normalized."""
    pass


class TransactionType(str, Enum):
    """Direction of a bank statement line."""

    CREDIT = "credit"
    DEBIT = "debit"

    @classmethod
    def normalize(cls, value: str) -> 'TransactionType':
        """Normalize transaction type from various bank statement formats.

        Raises:
            TransactionTypeError: If the transaction type cannot be mapped.
        """
        if isinstance(value, cls):
            return value

        type_map = {
            "CREDIT": cls.CREDIT,
            "CR": cls.CREDIT,
            "C": cls.CREDIT,
            "INFLOW": cls.CREDIT,
            "DEPOSIT": cls.CREDIT,
            "LODGEMENT": cls.CREDIT,
            "DEBIT": cls.DEBIT,
            "DR": cls.DEBIT,
            "D": cls.DEBIT,
            "OUTFLOW": cls.DEBIT,
            "WITHDRAWAL": cls.DEBIT,
            "PAYMENT": cls.DEBIT,
        }

        clean_value = str(value or "").strip().upper().replace(" ", "").replace("-", "").replace("_", "").rstrip(".")
        result = type_map.get(clean_value)

        if result is None:
            raise TransactionTypeError(f"Unknown transaction type: '{value}'")

        return result

    @classmethod
    def from_amount(cls, amount: Decimal) -> 'TransactionType':
        """Classify a signed amount (zero counts as a credit)."""
        if amount.is_nan():
            raise ValueError("Amount is not a number")
        return cls.DEBIT if amount < 0 else cls.CREDIT


def to_decimal(value) -> Decimal:
    """
    Convert a number or numeric string to Decimal.

    Floats go through ``str`` so that 0.1 becomes Decimal("0.1") rather than
    its binary expansion. Thousand separators and currency markers are removed.
    """
    if isinstance(value, Decimal):
        return value
    if value is None or value == '':
        return Decimal(0)
    if isinstance(value, str):
        value = value.replace('₦', '').replace('NGN', '').replace(',', '').replace(' ', '')
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError) as e:
        raise ValueError(f"Invalid amount: {value!r}") from e


class Transaction(BaseModel):
    """
    A single extracted statement line.

    The tax engine only reads ``amount``. Instances are frozen; a note edit
    goes through ``with_note`` which returns a replacement instance.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    date: str  # ISO date as produced by the extraction step (YYYY-MM-DD)
    amount: Decimal  # Signed: negative for outflows, positive for inflows
    type: TransactionType
    description: str = ""
    reference: str = ""  # Bank reference as printed; not unique
    note: str = ""
    source_file_id: Optional[str] = Field(default=None)

    @field_validator('amount', mode='before')
    @classmethod
    def parse_amount(cls, v):
        """Parse ints, floats and numeric strings into Decimal."""
        return to_decimal(v)

    @field_validator('type', mode='before')
    @classmethod
    def parse_type(cls, v):
        return TransactionType.normalize(v)

    @field_validator('description', 'reference', 'note', mode='before')
    @classmethod
    def none_to_empty(cls, v):
        return "" if v is None else v

    def with_note(self, note: str) -> 'Transaction':
        """Return a copy of this transaction carrying a new note."""
        return self.model_copy(update={"note": note or ""})
