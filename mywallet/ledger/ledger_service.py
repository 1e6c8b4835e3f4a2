"""
Ledger Service Module

Appends income/outcome entries and builds the balance view for a session.
"""

import logging
from datetime import datetime
from typing import Any, Callable

from pydantic import ValidationError

from ..accounts.session_resolver import SessionResolver, extract_token
from ..accounts.user_store import UserStore
from ..errors import ErrorKind, LedgerError, messages_from_validation
from ..models import TransactionKind, UserRecord
from .schemas import BalanceView, TransactionRequest

logger = logging.getLogger(__name__)

DATE_FORMAT = "%d/%m"


class LedgerService:
    """Records transactions against the user behind a bearer token."""

    def __init__(
        self,
        users: UserStore,
        resolver: SessionResolver,
        clock: Callable[[], datetime] = datetime.now,
    ):
        """Initialize the service.

        Args:
            users: Credential store holding the ledgers
            resolver: Bearer token resolver
            clock: Source of the server local time for date stamps
        """
        self.users = users
        self.resolver = resolver
        self.clock = clock

    def record_income(self, authorization: str | None, payload: dict[str, Any]) -> None:
        self._record(TransactionKind.INCOME, authorization, payload)

    def record_outcome(self, authorization: str | None, payload: dict[str, Any]) -> None:
        self._record(TransactionKind.OUTCOME, authorization, payload)

    def _record(
        self,
        kind: TransactionKind,
        authorization: str | None,
        payload: dict[str, Any],
    ) -> None:
        """Validate a transaction body and append it to the caller's ledger.

        Raises:
            LedgerError: UNAUTHENTICATED, VALIDATION, NOT_FOUND or INTERNAL
        """
        extract_token(authorization)

        try:
            request = TransactionRequest.model_validate(payload)
        except ValidationError as exc:
            raise LedgerError(ErrorKind.VALIDATION, messages_from_validation(exc)) from exc

        user_id = self.resolver.resolve(authorization)
        if user_id is None:
            raise LedgerError(ErrorKind.UNAUTHENTICATED, "Session not found")

        user = self.users.get_by_id(user_id)
        if user is None:
            raise LedgerError(ErrorKind.NOT_FOUND, "User not found")

        self.users.append_transaction(
            user.id,
            kind,
            request.amount,
            request.description,
            self.clock().strftime(DATE_FORMAT),
        )

    def get_balance(self, authorization: str | None) -> BalanceView:
        """Build the balance view for the caller.

        Raises:
            LedgerError: UNAUTHENTICATED if no token, NOT_FOUND if it resolves to no user
        """
        user_id = self.resolver.resolve(authorization)
        user = self.users.get_by_id(user_id) if user_id is not None else None
        if user is None:
            raise LedgerError(ErrorKind.NOT_FOUND, "User not found")

        return self.build_view(user)

    def build_view(self, user: UserRecord) -> BalanceView:
        incomes = [t.to_dict() for t in self.users.transactions_for(user.id, TransactionKind.INCOME)]
        outcomes = [t.to_dict() for t in self.users.transactions_for(user.id, TransactionKind.OUTCOME)]

        total = sum(t["amount"] for t in incomes) - sum(t["amount"] for t in outcomes)

        return BalanceView(
            name=user.name,
            incomes=incomes,
            outcomes=outcomes,
            total=total,
        )
