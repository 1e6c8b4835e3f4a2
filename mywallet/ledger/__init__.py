"""
Ledger Module

Income/outcome recording and balance views.
"""

from .ledger_service import LedgerService
from .schemas import BalanceView, TransactionRequest, TransactionView

__all__ = [
    "BalanceView",
    "LedgerService",
    "TransactionRequest",
    "TransactionView",
]
