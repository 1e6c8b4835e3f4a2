"""
Pytest configuration and fixtures for MyWallet tests.
"""

from datetime import datetime
from typing import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from mywallet.accounts import AuthService, SessionResolver, SessionStore, UserStore
from mywallet.api.database import Database
from mywallet.api.main import create_app
from mywallet.config import Settings
from mywallet.ledger import LedgerService

# Lowest work factor bcrypt accepts, keeps the suite fast
TEST_BCRYPT_ROUNDS = 4

FIXED_NOW = datetime(2025, 3, 7, 14, 30)


@pytest.fixture
def settings() -> Settings:
    """Settings backed by an in-memory SQLite database."""
    return Settings(
        database_url="sqlite://",
        bcrypt_rounds=TEST_BCRYPT_ROUNDS,
        debug_endpoints=False,
        log_level="DEBUG",
    )


@pytest.fixture
def database() -> Generator[Database, None, None]:
    db = Database("sqlite://")
    db.create_all()
    yield db
    db.dispose()


@pytest.fixture
def db_session(database: Database) -> Generator[Session, None, None]:
    with database.session() as session:
        yield session


@pytest.fixture
def users(db_session: Session) -> UserStore:
    return UserStore(db_session)


@pytest.fixture
def sessions(db_session: Session) -> SessionStore:
    return SessionStore(db_session)


@pytest.fixture
def auth_service(users: UserStore, sessions: SessionStore) -> AuthService:
    return AuthService(users, sessions, bcrypt_rounds=TEST_BCRYPT_ROUNDS)


@pytest.fixture
def ledger_service(users: UserStore, sessions: SessionStore) -> LedgerService:
    return LedgerService(users, SessionResolver(sessions), clock=lambda: FIXED_NOW)


@pytest.fixture
def alice_token(auth_service: AuthService) -> str:
    """Register alice and return a bearer header value for her session."""
    auth_service.register({"name": "alice", "email": "alice@x.com", "password": "pass123"})
    token = auth_service.login({"email": "alice@x.com", "password": "pass123"})
    return f"Bearer {token}"


@pytest.fixture
def client(settings: Settings) -> Generator[TestClient, None, None]:
    """Test client running the real app lifespan."""
    with TestClient(create_app(settings)) as test_client:
        yield test_client


@pytest.fixture
def debug_client(settings: Settings) -> Generator[TestClient, None, None]:
    """Test client with the debug endpoints mounted."""
    settings.debug_endpoints = True
    with TestClient(create_app(settings)) as test_client:
        yield test_client
