"""
Bill Ledger - Source Package

A small household bill ledger: pick a person, enter an amount,
and the app keeps a timestamped record with running totals.

DESIGN PRINCIPLES:
1. The view-model owns the ledger, storage only mirrors it
2. Every mutation writes the whole snapshot
3. Fail early, fail visibly (validation errors are shown, never swallowed)
4. Every ledger change is logged
5. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Bill Ledger Team"
