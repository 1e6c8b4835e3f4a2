"""
User Store Module

Persists user records and their ledger transactions.
"""

import logging

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ..errors import ErrorKind, LedgerError, store_errors
from ..models import TransactionKind, TransactionRecord, UserRecord

logger = logging.getLogger(__name__)


class UserStore:
    """Credential store backed by the users and transactions tables."""

    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, user_id: str) -> UserRecord | None:
        with store_errors(self.db, "load user"):
            return self.db.get(UserRecord, user_id)

    def get_by_name(self, name: str) -> UserRecord | None:
        with store_errors(self.db, "look up user by name"):
            return self.db.scalars(select(UserRecord).where(UserRecord.name == name)).first()

    def get_by_email(self, email: str) -> UserRecord | None:
        with store_errors(self.db, "look up user by email"):
            return self.db.scalars(select(UserRecord).where(UserRecord.email == email)).first()

    def list_all(self) -> list[UserRecord]:
        with store_errors(self.db, "list users"):
            return list(self.db.scalars(select(UserRecord).order_by(UserRecord.name)))

    def add(self, name: str, email: str, password_hash: str) -> UserRecord:
        """Insert a user with empty ledgers.

        Args:
            name: Unique display name
            email: Unique email address
            password_hash: bcrypt hash of the password

        Returns:
            The stored UserRecord

        Raises:
            LedgerError: DUPLICATE_NAME/DUPLICATE_EMAIL if a unique index rejects the row
        """
        user = UserRecord(name=name, email=email, password_hash=password_hash)
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            # A concurrent signup won the race for the name or the email
            if self.get_by_name(name) is not None:
                raise LedgerError(ErrorKind.DUPLICATE_NAME, "This name already exists") from exc
            raise LedgerError(ErrorKind.DUPLICATE_EMAIL, "This e-mail already exists") from exc
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception("Storage failure while trying to create user %s", name)
            raise LedgerError(ErrorKind.INTERNAL, "Could not create user") from exc

        self.db.refresh(user)
        return user

    def append_transaction(
        self,
        user_id: str,
        kind: TransactionKind,
        amount: int,
        description: str,
        date: str,
    ) -> TransactionRecord:
        """Append one entry to a user's income or outcome list.

        A single INSERT, so concurrent appends for the same user never
        overwrite each other.
        """
        record = TransactionRecord(
            user_id=user_id,
            kind=kind,
            amount=amount,
            description=description,
            date=date,
        )
        with store_errors(self.db, f"record {kind.value}"):
            self.db.add(record)
            self.db.commit()
            self.db.refresh(record)

        logger.debug("Appended %s of %s for user %s", kind.value, amount, user_id)
        return record

    def transactions_for(self, user_id: str, kind: TransactionKind) -> list[TransactionRecord]:
        with store_errors(self.db, f"load {kind.value}s"):
            query = (
                select(TransactionRecord)
                .where(TransactionRecord.user_id == user_id, TransactionRecord.kind == kind)
                .order_by(TransactionRecord.id)
            )
            return list(self.db.scalars(query))

    def delete_all(self) -> int:
        """Remove every user and their transactions.

        Returns:
            Number of users deleted
        """
        with store_errors(self.db, "delete users"):
            self.db.execute(delete(TransactionRecord))
            result = self.db.execute(delete(UserRecord))
            self.db.commit()

        logger.warning("Deleted %s users", result.rowcount)
        return result.rowcount
