"""
Library Module

Collaborators around the tax engine: statement parsing, the in-memory
transaction ledger and report exporters.

Copyright (c) 2026 Andreas Wagner. All rights reserved.
"""

__all__ = ['parsers', 'ledger', 'exporters']
