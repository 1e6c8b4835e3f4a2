"""
Session Store Module

Persists opaque login tokens mapped to user identity.
"""

import uuid

from sqlalchemy import select
from sqlalchemy.orm import Session

from ..errors import store_errors
from ..models import SessionRecord


class SessionStore:
    """Session store backed by the sessions table."""

    def __init__(self, db: Session):
        self.db = db

    def create(self, user_id: str, user_name: str) -> SessionRecord:
        """Issue a fresh random token for a user.

        Args:
            user_id: Id of the authenticated user
            user_name: Display name snapshot stored with the session

        Returns:
            The stored SessionRecord
        """
        record = SessionRecord(token=str(uuid.uuid4()), user_id=user_id, user=user_name)
        with store_errors(self.db, "create session"):
            self.db.add(record)
            self.db.commit()
            self.db.refresh(record)
        return record

    def get(self, token: str) -> SessionRecord | None:
        with store_errors(self.db, "look up session"):
            return self.db.get(SessionRecord, token)

    def list_all(self) -> list[SessionRecord]:
        with store_errors(self.db, "list sessions"):
            return list(self.db.scalars(select(SessionRecord)))
