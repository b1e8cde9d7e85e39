"""
Tax Calculator System

Provides jurisdiction-specific personal income tax implementations.

Copyright (c) 2026 Andreas Wagner. All rights reserved.
"""

from .base import IncomeTaxCalculator, get_calculator, list_available_jurisdictions
from .nigeria import NigeriaIncomeTaxCalculator

__all__ = [
    "IncomeTaxCalculator",
    "NigeriaIncomeTaxCalculator",
    "get_calculator",
    "list_available_jurisdictions",
]
