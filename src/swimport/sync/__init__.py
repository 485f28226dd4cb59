"""
Create-or-update reconciliation of customer rows against Shopware.

Exports the public API:
- CustomerImporter
- ImportOutcome
- ImportReport
"""
from .engine import CustomerImporter
from .state import ImportOutcome, ImportReport
