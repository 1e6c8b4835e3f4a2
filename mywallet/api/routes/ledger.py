"""
Ledger API Routes

Income/outcome recording and the balance view.
"""

from typing import Any

from fastapi import APIRouter, Body, Depends, Response, status

from ...ledger import BalanceView, LedgerService
from ..auth import get_authorization, get_ledger_service

router = APIRouter(tags=["ledger"])


@router.put("/income", status_code=status.HTTP_201_CREATED)
def record_income(
    payload: dict[str, Any] | None = Body(None),
    authorization: str | None = Depends(get_authorization),
    service: LedgerService = Depends(get_ledger_service),
) -> Response:
    """Append an income entry to the caller's ledger."""
    service.record_income(authorization, payload or {})
    return Response(status_code=status.HTTP_201_CREATED)


@router.put("/outcome", status_code=status.HTTP_201_CREATED)
def record_outcome(
    payload: dict[str, Any] | None = Body(None),
    authorization: str | None = Depends(get_authorization),
    service: LedgerService = Depends(get_ledger_service),
) -> Response:
    """Append an outcome (expense) entry to the caller's ledger."""
    service.record_outcome(authorization, payload or {})
    return Response(status_code=status.HTTP_201_CREATED)


@router.get("/balance", response_model=BalanceView)
def get_balance(
    authorization: str | None = Depends(get_authorization),
    service: LedgerService = Depends(get_ledger_service),
) -> BalanceView:
    """Return the caller's name, incomes, outcomes and running total."""
    return service.get_balance(authorization)
