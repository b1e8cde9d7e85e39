"""
Core Kernel Module

Foundational utilities shared by the tax engine.

Components:
- hashing: Canonical JSON + SHA256 sealing of tax reports

Copyright (c) 2026 Andreas Wagner. All rights reserved.
"""

__all__ = ['hashing']
