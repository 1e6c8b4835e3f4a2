"""
API Routes Package

Contains all route modules for the ledger API.
"""

from .accounts import router as accounts_router
from .debug import router as debug_router
from .ledger import router as ledger_router

__all__ = [
    "accounts_router",
    "debug_router",
    "ledger_router",
]
