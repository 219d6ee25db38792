"""Expense API endpoints."""

from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlmodel import Session

from flatshare.api.deps import get_current_user
from flatshare.database import get_session
from flatshare.models.expense import CENT, Expense
from flatshare.models.user import User
from flatshare.schemas.common import OkResponse, UserSummary
from flatshare.schemas.expense import BalancesResponse, ExpenseCreateRequest, ExpenseResponse, MemberBalance
from flatshare.services import balance_service, expense_service, group_service

router = APIRouter(prefix="/expenses", tags=["expenses"])


def _money(value: Decimal) -> float:
    return float(value.quantize(CENT, rounding=ROUND_HALF_UP))


def _expense_to_response(expense: Expense, session: Session) -> ExpenseResponse:
    response = ExpenseResponse.model_validate(expense)
    payer = session.get(User, expense.payer_id)
    response.payer = UserSummary.model_validate(payer) if payer else None
    return response


@router.post("", response_model=ExpenseResponse, status_code=status.HTTP_201_CREATED)
def create_expense(
    request: ExpenseCreateRequest,
    user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    """Record an expense. The payer defaults to the caller."""
    payer_id = request.payer_id or user.id
    expense = expense_service.create_expense(
        request.group_id,
        payer_id,
        request.model_dump(include={"amount", "description", "category", "date"}),
        session,
    )
    return _expense_to_response(expense, session)


@router.get("/group/{group_id}", response_model=list[ExpenseResponse])
def list_group_expenses(
    group_id: str,
    start_date: Optional[datetime] = Query(default=None, alias="startDate"),
    end_date: Optional[datetime] = Query(default=None, alias="endDate"),
    user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    """Expenses in a group, most recent first, optionally bounded by date (inclusive)."""
    expenses = expense_service.list_group_expenses(group_id, user.id, session, start_date, end_date)
    return [_expense_to_response(e, session) for e in expenses]


@router.get("/group/{group_id}/balances", response_model=BalancesResponse)
def group_balances(
    group_id: str,
    start_date: Optional[datetime] = Query(default=None, alias="startDate"),
    end_date: Optional[datetime] = Query(default=None, alias="endDate"),
    user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    """Equal-split balances per member over the selected expenses."""
    expenses = expense_service.list_group_expenses(group_id, user.id, session, start_date, end_date)
    roster = group_service.list_group_members(group_id, user.id, session)
    result = balance_service.compute_balances(expenses, [m.user_id for m, _ in roster])

    balances = []
    for member, member_user in roster:
        entry = result["balances"][member.user_id]
        balances.append(MemberBalance(
            user_id=member.user_id,
            name=member_user.name,
            paid=_money(entry["paid"]),
            share=_money(entry["share"]),
            balance=_money(entry["balance"]),
        ))
    return BalancesResponse(total=_money(result["total"]), balances=balances)


@router.delete("/{expense_id}", response_model=OkResponse)
def delete_expense(
    expense_id: str,
    user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    """Delete an expense. Only its payer or the group owner."""
    return expense_service.delete_expense(expense_id, user.id, session)
