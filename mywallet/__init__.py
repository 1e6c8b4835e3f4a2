"""
MyWallet Ledger Backend

Personal-finance ledger: users, sessions, and income/outcome transactions.
"""

__version__ = "1.0.0"
