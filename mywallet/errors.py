"""
Ledger Error Types

Structured error carrying a kind and field-level messages.
"""

import logging
from contextlib import contextmanager
from enum import Enum

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)


class ErrorKind(str, Enum):
    """Failure categories surfaced to callers."""

    VALIDATION = "validation_error"
    DUPLICATE_NAME = "duplicate_name"
    DUPLICATE_EMAIL = "duplicate_email"
    NOT_FOUND = "not_found"
    INVALID_CREDENTIALS = "invalid_credentials"
    UNAUTHENTICATED = "unauthenticated"
    INTERNAL = "internal_error"

    @property
    def status_code(self) -> int:
        return _STATUS_CODES[self]


_STATUS_CODES = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.DUPLICATE_NAME: 409,
    ErrorKind.DUPLICATE_EMAIL: 409,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.INVALID_CREDENTIALS: 401,
    ErrorKind.UNAUTHENTICATED: 401,
    ErrorKind.INTERNAL: 500,
}


class LedgerError(Exception):
    """Error raised by the account and ledger services."""

    def __init__(self, kind: ErrorKind, messages: list[str] | str):
        if isinstance(messages, str):
            messages = [messages]
        self.kind = kind
        self.messages = list(messages)
        super().__init__(f"{kind.value}: {'; '.join(self.messages)}")

    @property
    def status_code(self) -> int:
        return self.kind.status_code

    def to_dict(self) -> dict:
        return {
            "error": self.kind.value,
            "messages": self.messages,
        }


def messages_from_validation(exc) -> list[str]:
    """Flatten a pydantic ValidationError into one message per violated rule."""
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()))
        if location:
            messages.append(f"{location}: {error['msg']}")
        else:
            messages.append(error["msg"])
    return messages


@contextmanager
def store_errors(db: Session, action: str):
    """Roll back and re-raise storage failures as INTERNAL ledger errors."""
    try:
        yield
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Storage failure while trying to %s", action)
        raise LedgerError(ErrorKind.INTERNAL, f"Could not {action}") from exc
