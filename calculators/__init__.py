"""
Calculators Module

The income tax engine.

Components:
- income_aggregator: Inflow/outflow totals of a transaction list
- reliefs: Pension and rent relief
- band_allocator: Progressive band walk
- tax_calculators: Jurisdiction plug-ins (Nigeria PIT)
- engine: calculate_tax() entry point

Copyright (c) 2026 Andreas Wagner. All rights reserved.
"""

__all__ = ['income_aggregator', 'reliefs', 'band_allocator', 'tax_calculators', 'engine']
