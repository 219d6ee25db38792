"""Equal-split balances over a list of expenses.

Pure computation: every expense is split evenly across the current roster.
A member's balance is what they paid minus their share; positive means the
group owes them.
"""

from collections.abc import Iterable, Sequence
from decimal import Decimal

from flatshare.models.expense import Expense


def compute_balances(expenses: Iterable[Expense], member_ids: Sequence[str]) -> dict:
    """Return ``{"total": Decimal, "balances": {member_id: {paid, share, balance}}}``.

    Payments by users no longer in ``member_ids`` still count toward the total
    but are not credited to anyone.
    """
    balances = {
        member_id: {"paid": Decimal("0"), "share": Decimal("0"), "balance": Decimal("0")}
        for member_id in member_ids
    }
    total = Decimal("0")

    for expense in expenses:
        amount = Decimal(expense.amount)
        total += amount
        if expense.payer_id in balances:
            balances[expense.payer_id]["paid"] += amount
        if balances:
            share = amount / len(balances)
            for entry in balances.values():
                entry["share"] += share

    for entry in balances.values():
        entry["balance"] = entry["paid"] - entry["share"]

    return {"total": total, "balances": balances}
