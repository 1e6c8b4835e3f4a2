"""
Ledger Schemas

Request validation and the balance view returned to clients.
"""

from typing import Any

from pydantic import BaseModel, Field, field_validator

DESCRIPTION_PATTERN = r"^[A-Za-z0-9]+$"

# Range of the BIGINT amount column
MIN_AMOUNT = -(2**63)
MAX_AMOUNT = 2**63 - 1
MAX_DESCRIPTION_LENGTH = 255


class TransactionRequest(BaseModel):
    """Body of PUT /income and PUT /outcome."""

    amount: int = Field(..., ge=MIN_AMOUNT, le=MAX_AMOUNT)
    description: str = Field(..., pattern=DESCRIPTION_PATTERN, max_length=MAX_DESCRIPTION_LENGTH)

    @field_validator("amount", mode="before")
    @classmethod
    def reject_bool(cls, value: Any) -> Any:
        if isinstance(value, bool):
            raise ValueError("amount must be an integer, not a boolean")
        return value


class TransactionView(BaseModel):
    amount: int
    description: str
    date: str


class BalanceView(BaseModel):
    """A user's ledger with credentials left out."""

    name: str
    incomes: list[TransactionView]
    outcomes: list[TransactionView]
    total: int
