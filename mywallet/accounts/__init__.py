"""
Accounts Module

User registration, login, and session resolution.
"""

from .auth_service import AuthService, hash_password, verify_password
from .session_resolver import SessionResolver, extract_token
from .session_store import SessionStore
from .user_store import UserStore

__all__ = [
    "AuthService",
    "SessionResolver",
    "SessionStore",
    "UserStore",
    "extract_token",
    "hash_password",
    "verify_password",
]
