"""Expense and balance schemas."""

from datetime import datetime
from typing import Annotated, Optional

from flatshare.errors import ErrorCode
from flatshare.schemas.common import Amount, CamelModel, IsoDate, RequiredId, UserSummary, min_length


class ExpenseCreateRequest(CamelModel):
    group_id: RequiredId
    amount: Amount
    description: Annotated[str, min_length(1, ErrorCode.EXPENSE_DESCRIPTION_REQUIRED)]
    category: Optional[str] = None
    payer_id: Optional[str] = None
    date: IsoDate


class ExpenseResponse(CamelModel):
    id: str
    group_id: str
    payer_id: str
    amount: float
    description: str
    category: Optional[str] = None
    date: datetime
    created_at: datetime
    payer: Optional[UserSummary] = None


class MemberBalance(CamelModel):
    user_id: str
    name: str
    paid: float
    share: float
    balance: float


class BalancesResponse(CamelModel):
    total: float
    balances: list[MemberBalance]
