"""
Auth Service Module

Registers users and authenticates logins, issuing session tokens.
"""

import logging
from typing import Any

import bcrypt
from pydantic import ValidationError

from ..errors import ErrorKind, LedgerError, messages_from_validation
from .schemas import DEFAULT_ALLOWED_TLDS, LoginRequest, SignupRequest
from .session_store import SessionStore
from .user_store import UserStore

logger = logging.getLogger(__name__)


def hash_password(password: str, rounds: int = 10) -> str:
    """Salted one-way bcrypt hash of a password."""
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Check a password against a stored bcrypt hash."""
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        logger.warning("Stored password hash is not a valid bcrypt hash")
        return False


def _text(value: Any) -> str | None:
    return value if isinstance(value, str) else None


class AuthService:
    """Signup and login on top of the user and session stores."""

    def __init__(
        self,
        users: UserStore,
        sessions: SessionStore,
        allowed_tlds: list[str] | tuple[str, ...] = DEFAULT_ALLOWED_TLDS,
        bcrypt_rounds: int = 10,
    ):
        """Initialize the service.

        Args:
            users: Credential store
            sessions: Session store
            allowed_tlds: Top-level domains accepted in emails
            bcrypt_rounds: bcrypt work factor
        """
        self.users = users
        self.sessions = sessions
        self.allowed_tlds = list(allowed_tlds)
        self.bcrypt_rounds = bcrypt_rounds

    def _validate(self, model, payload: dict[str, Any]):
        try:
            return model.model_validate(payload, context={"allowed_tlds": self.allowed_tlds})
        except ValidationError as exc:
            raise LedgerError(ErrorKind.VALIDATION, messages_from_validation(exc)) from exc

    def register(self, payload: dict[str, Any]) -> None:
        """Create a user from a signup body.

        Uniqueness is checked on the raw input before format validation:
        name first, then email.

        Args:
            payload: {"name", "email", "password"}

        Raises:
            LedgerError: DUPLICATE_NAME, DUPLICATE_EMAIL or VALIDATION
        """
        name = _text(payload.get("name"))
        email = _text(payload.get("email"))

        if name is not None and self.users.get_by_name(name) is not None:
            raise LedgerError(ErrorKind.DUPLICATE_NAME, "This name already exists")
        if email is not None and self.users.get_by_email(email) is not None:
            raise LedgerError(ErrorKind.DUPLICATE_EMAIL, "This e-mail already exists")

        request = self._validate(SignupRequest, payload)

        password_hash = hash_password(request.password, self.bcrypt_rounds)
        user = self.users.add(request.name, email, password_hash)
        logger.info("Registered user %s (%s)", user.name, user.id)

    def login(self, payload: dict[str, Any]) -> str:
        """Authenticate a login body and open a session.

        The user lookup runs before format validation, so an unknown
        malformed email reports NOT_FOUND.

        Args:
            payload: {"email", "password"}

        Returns:
            The new session token

        Raises:
            LedgerError: NOT_FOUND, VALIDATION or INVALID_CREDENTIALS
        """
        email = _text(payload.get("email"))
        user = self.users.get_by_email(email) if email is not None else None
        if user is None:
            raise LedgerError(ErrorKind.NOT_FOUND, "E-mail or password not found")

        request = self._validate(LoginRequest, payload)

        if not verify_password(request.password, user.password_hash):
            logger.warning("Failed login for user %s", user.id)
            raise LedgerError(ErrorKind.INVALID_CREDENTIALS, "E-mail or password not found")

        session = self.sessions.create(user.id, user.name)
        logger.info("User %s logged in", user.id)
        return session.token

    def compare_password(self, email: str, password: str) -> bool:
        """Debug helper: does the password match the stored hash for email."""
        user = self.users.get_by_email(email)
        if user is None:
            raise LedgerError(ErrorKind.NOT_FOUND, "E-mail or password not found")
        return verify_password(password, user.password_hash)
