"""
Database Models

SQLAlchemy tables for users, ledger transactions, and sessions.
"""

import uuid
from enum import Enum

from sqlalchemy import Enum as SAEnum
from sqlalchemy import BigInteger, ForeignKey, Integer, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):
    pass


class TransactionKind(str, Enum):
    """Which ledger list a transaction belongs to."""

    INCOME = "income"
    OUTCOME = "outcome"


def _new_user_id() -> str:
    return uuid.uuid4().hex


class UserRecord(Base):
    """Registered user. Name and email are unique."""

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=_new_user_id)
    name: Mapped[str] = mapped_column(String(24), unique=True, index=True, nullable=False)
    email: Mapped[str] = mapped_column(String(320), unique=True, index=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(128), nullable=False)

    transactions: Mapped[list["TransactionRecord"]] = relationship(
        back_populates="user",
        order_by="TransactionRecord.id",
        cascade="all, delete-orphan",
    )

    @property
    def incomes(self) -> list["TransactionRecord"]:
        return [t for t in self.transactions if t.kind == TransactionKind.INCOME]

    @property
    def outcomes(self) -> list["TransactionRecord"]:
        return [t for t in self.transactions if t.kind == TransactionKind.OUTCOME]


class TransactionRecord(Base):
    """Immutable ledger entry. The autoincrement id fixes insertion order."""

    __tablename__ = "transactions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(
        String(32), ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False
    )
    kind: Mapped[TransactionKind] = mapped_column(
        SAEnum(TransactionKind, name="transaction_kind"), nullable=False
    )
    amount: Mapped[int] = mapped_column(BigInteger, nullable=False)
    description: Mapped[str] = mapped_column(String(255), nullable=False)
    date: Mapped[str] = mapped_column(String(5), nullable=False)  # DD/MM

    user: Mapped[UserRecord] = relationship(back_populates="transactions")

    def to_dict(self) -> dict:
        return {
            "amount": self.amount,
            "description": self.description,
            "date": self.date,
        }


class SessionRecord(Base):
    """Login session. user_id is a lookup key, not a foreign key."""

    __tablename__ = "sessions"

    token: Mapped[str] = mapped_column(String(64), primary_key=True)
    user_id: Mapped[str] = mapped_column(String(32), index=True, nullable=False)
    user: Mapped[str] = mapped_column("user_name", String(24), nullable=False)

    def to_dict(self) -> dict:
        return {
            "token": self.token,
            "userId": self.user_id,
            "user": self.user,
        }
