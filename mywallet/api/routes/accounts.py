"""
Account API Routes

Signup and login.
"""

from typing import Any

from fastapi import APIRouter, Body, Depends, Response, status

from ...accounts import AuthService
from ..auth import get_auth_service

router = APIRouter(tags=["accounts"])


@router.post("/signup", status_code=status.HTTP_201_CREATED)
def signup(
    payload: dict[str, Any] | None = Body(None),
    service: AuthService = Depends(get_auth_service),
) -> Response:
    """Register a new user.

    Args:
        payload: {"name", "email", "password"}
        service: Auth service

    Returns:
        Empty 201 response
    """
    service.register(payload or {})
    return Response(status_code=status.HTTP_201_CREATED)


@router.post("/login")
def login(
    payload: dict[str, Any] | None = Body(None),
    service: AuthService = Depends(get_auth_service),
) -> str:
    """Authenticate and return a session token.

    Args:
        payload: {"email", "password"}
        service: Auth service

    Returns:
        Bearer token string
    """
    return service.login(payload or {})
