"""Expense model."""

import secrets
from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlmodel import Field, SQLModel

from flatshare.utils.dates import utcnow

CENT = Decimal("0.01")


def is_whole_cents(amount: Decimal) -> bool:
    return amount.normalize().as_tuple().exponent >= -2


class Expense(SQLModel, table=True):
    __tablename__ = "expenses"

    id: str = Field(default_factory=lambda: f"exp_{secrets.token_hex(6)}", primary_key=True)
    group_id: str = Field(foreign_key="groups.id", index=True)
    payer_id: str = Field(foreign_key="users.id", index=True)
    amount: Decimal = Field(max_digits=12, decimal_places=2)
    description: str
    category: Optional[str] = None
    date: datetime = Field(index=True)
    created_at: datetime = Field(default_factory=utcnow)
