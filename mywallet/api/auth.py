"""
Request Dependencies

Wires per-request stores and services, and reads the bearer header.
"""

from fastapi import Depends, Header, Request
from sqlalchemy.orm import Session

from ..accounts import AuthService, SessionResolver, SessionStore, UserStore
from ..config import Settings
from ..ledger import LedgerService
from .database import get_db


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


async def get_authorization(authorization: str | None = Header(None)) -> str | None:
    """Raw Authorization header; token checks happen in the services."""
    return authorization


def get_user_store(db: Session = Depends(get_db)) -> UserStore:
    return UserStore(db)


def get_session_store(db: Session = Depends(get_db)) -> SessionStore:
    return SessionStore(db)


def get_auth_service(
    users: UserStore = Depends(get_user_store),
    sessions: SessionStore = Depends(get_session_store),
    settings: Settings = Depends(get_settings),
) -> AuthService:
    return AuthService(
        users,
        sessions,
        allowed_tlds=settings.allowed_tlds,
        bcrypt_rounds=settings.bcrypt_rounds,
    )


def get_ledger_service(
    users: UserStore = Depends(get_user_store),
    sessions: SessionStore = Depends(get_session_store),
) -> LedgerService:
    return LedgerService(users, SessionResolver(sessions))
