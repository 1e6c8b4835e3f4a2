"""
Debug API Routes

Legacy listing and maintenance endpoints. Mounted only when
debug_endpoints is enabled.
"""

from typing import Any

from fastapi import APIRouter, Body, Depends
from pydantic import BaseModel, ValidationError

from ...accounts import AuthService, SessionStore, UserStore
from ...accounts.schemas import CompareRequest, SessionView
from ...errors import ErrorKind, LedgerError, messages_from_validation
from ...ledger import TransactionView
from ..auth import get_auth_service, get_session_store, get_user_store

router = APIRouter(tags=["debug"])


class UserSummary(BaseModel):
    """User listing without the password hash."""

    id: str
    name: str
    email: str
    incomes: list[TransactionView]
    outcomes: list[TransactionView]


def _summaries(users: UserStore) -> list[UserSummary]:
    return [
        UserSummary(
            id=user.id,
            name=user.name,
            email=user.email,
            incomes=[t.to_dict() for t in user.incomes],
            outcomes=[t.to_dict() for t in user.outcomes],
        )
        for user in users.list_all()
    ]


@router.get("/signup", response_model=list[UserSummary])
def list_users(users: UserStore = Depends(get_user_store)) -> list[UserSummary]:
    """List all users without password hashes."""
    return _summaries(users)


@router.post("/status", response_model=list[UserSummary])
def status_users(users: UserStore = Depends(get_user_store)) -> list[UserSummary]:
    """Same listing as GET /signup."""
    return _summaries(users)


@router.delete("/deleteallusers", response_model=list[UserSummary])
def delete_all_users(users: UserStore = Depends(get_user_store)) -> list[UserSummary]:
    """Delete every user and return what is left."""
    users.delete_all()
    return _summaries(users)


@router.get("/compare")
def compare_password(
    payload: dict[str, Any] | None = Body(None),
    service: AuthService = Depends(get_auth_service),
) -> bool:
    """Check a raw password against the stored hash for an email."""
    try:
        request = CompareRequest.model_validate(payload or {})
    except ValidationError as exc:
        raise LedgerError(ErrorKind.VALIDATION, messages_from_validation(exc)) from exc
    return service.compare_password(request.email, request.password)


@router.post("/sessions", response_model=list[SessionView])
def list_sessions(sessions: SessionStore = Depends(get_session_store)) -> list[SessionView]:
    """List all sessions."""
    return [SessionView(**s.to_dict()) for s in sessions.list_all()]
