"""
FastAPI Backend for MyWallet

Provides the REST API for signup, login and the income/outcome ledger.
"""

from .main import app, create_app

__all__ = ["app", "create_app"]
