"""Expense ledger: per-group payments with payer attribution."""

import logging
from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, col, select

from flatshare.database import is_missing_table_error
from flatshare.errors import ErrorCode, InternalError, NotFound, Unauthorized, ValidationError
from flatshare.models.expense import Expense, is_whole_cents
from flatshare.services.policy import is_payer_or_owner, require_group, require_member
from flatshare.utils.dates import to_utc

logger = logging.getLogger(__name__)


def create_expense(group_id: str, payer_id: str, data: dict, session: Session) -> Expense:
    """Record an expense paid by ``payer_id``.

    The membership check applies to the payer, which is the caller unless the
    request named another member.
    """
    amount = Decimal(str(data["amount"]))
    if amount <= 0:
        raise ValidationError(ErrorCode.EXPENSE_AMOUNT_INVALID)
    if not is_whole_cents(amount):
        raise ValidationError(ErrorCode.EXPENSE_AMOUNT_TOO_PRECISE)

    group = require_group(session, group_id)
    require_member(session, group, payer_id, ErrorCode.EXPENSE_NOT_MEMBER)

    expense = Expense(
        group_id=group.id,
        payer_id=payer_id,
        amount=amount,
        description=data["description"],
        category=data.get("category") or None,
        date=to_utc(data["date"]),
    )
    try:
        session.add(expense)
        session.commit()
    except SQLAlchemyError as e:
        session.rollback()
        logger.error("Failed to create expense in group %s: %s", group_id, e)
        if is_missing_table_error(e):
            raise InternalError(ErrorCode.SERVER_SCHEMA_MISSING) from e
        raise InternalError(ErrorCode.EXPENSE_DATABASE_ERROR) from e
    session.refresh(expense)
    return expense


def list_group_expenses(
    group_id: str,
    user_id: str,
    session: Session,
    start_date: Optional[datetime] = None,
    end_date: Optional[datetime] = None,
) -> list[Expense]:
    """Expenses of a group within inclusive bounds, most recent first."""
    group = require_group(session, group_id)
    require_member(session, group, user_id)

    query = select(Expense).where(Expense.group_id == group.id)
    if start_date is not None:
        query = query.where(Expense.date >= to_utc(start_date))
    if end_date is not None:
        query = query.where(Expense.date <= to_utc(end_date))
    return list(session.exec(query.order_by(col(Expense.date).desc())).all())


def delete_expense(expense_id: str, user_id: str, session: Session) -> dict:
    expense = session.get(Expense, expense_id)
    if not expense:
        raise NotFound(ErrorCode.EXPENSE_NOT_FOUND)
    group = require_group(session, expense.group_id)
    require_member(session, group, user_id, ErrorCode.EXPENSE_NOT_MEMBER)
    if not is_payer_or_owner(expense, group, user_id):
        raise Unauthorized(ErrorCode.EXPENSE_ONLY_PAYER_OR_OWNER_CAN_DELETE)

    session.delete(expense)
    session.commit()
    logger.info("Expense %s deleted by %s", expense_id, user_id)
    return {"ok": True}
