"""
Aggregation Engine

Derives the dashboard figures from a snapshot of transactions and goals.

DESIGN DECISION: Everything here is a pure function. Results are
recomputed from the full input on every call; nothing is cached and
nothing is updated incrementally. With a personal-sized ledger this is
fast enough and it cannot drift out of sync with the data.
"""

from datetime import date
from decimal import Decimal
from typing import Iterable, Sequence

from pydantic import BaseModel, Field

from finance_tracker.models import (
    CategoryRegistry,
    Goal,
    Split,
    TransactionDraft,
    TransactionType,
    splits_total,
)


ZERO = Decimal("0")
MONTH_LABEL_FORMAT = "%b %y"


class Totals(BaseModel):
    """Headline figures for the dashboard cards."""
    income: Decimal = ZERO
    expenses: Decimal = ZERO
    balance: Decimal = ZERO


class MonthlyFlow(BaseModel):
    """Income and expenses for one calendar month."""
    period_label: str = Field(..., description="Short month + 2-digit year, e.g. 'Jan 24'")
    income: Decimal = ZERO
    expenses: Decimal = ZERO

    @property
    def net(self) -> Decimal:
        return self.income - self.expenses


class CategoryAmount(BaseModel):
    """One slice of the expense breakdown."""
    category_id: str
    name: str
    amount: Decimal


class GoalProgress(BaseModel):
    """One progress bar."""
    goal_id: str
    name: str
    current_amount: Decimal
    target_amount: Decimal
    fraction: float = Field(..., ge=0.0, le=1.0)


def totals(transactions: Iterable[TransactionDraft]) -> Totals:
    """Sum totals by type. balance = income - expenses."""
    income = ZERO
    expenses = ZERO
    for t in transactions:
        if t.type == TransactionType.INCOME:
            income += t.total_amount
        else:
            expenses += t.total_amount
    return Totals(income=income, expenses=expenses, balance=income - expenses)


def expense_by_category(transactions: Iterable[TransactionDraft]) -> dict[str, Decimal]:
    """Sum the splits of expense transactions per category id."""
    result: dict[str, Decimal] = {}
    for t in transactions:
        if t.type != TransactionType.EXPENSE:
            continue
        for split in t.splits:
            result[split.category_id] = result.get(split.category_id, ZERO) + split.amount
    return result


def expense_breakdown(
    transactions: Iterable[TransactionDraft],
    registry: CategoryRegistry,
) -> list[CategoryAmount]:
    """expense_by_category() with names resolved, sorted by name."""
    rows = [
        CategoryAmount(category_id=cid, name=registry.resolve(cid), amount=amount)
        for cid, amount in expense_by_category(transactions).items()
    ]
    rows.sort(key=lambda row: (row.name, row.category_id))
    return rows


def month_label(day: date) -> str:
    return day.strftime(MONTH_LABEL_FORMAT)


def monthly_series(transactions: Sequence[TransactionDraft]) -> list[MonthlyFlow]:
    """
    Income and expenses per calendar month.

    Months are bucketed in the order they are first seen walking the
    input from the last transaction to the first; that order is then
    reversed. Input sorted by ascending date gives ascending months.
    Unsorted input gives an unspecified month order.
    """
    buckets: dict[str, dict[str, Decimal]] = {}
    for t in reversed(list(transactions)):
        label = month_label(t.date)
        bucket = buckets.setdefault(label, {"income": ZERO, "expenses": ZERO})
        if t.type == TransactionType.INCOME:
            bucket["income"] += t.total_amount
        else:
            bucket["expenses"] += t.total_amount

    return [
        MonthlyFlow(period_label=label, **amounts)
        for label, amounts in reversed(list(buckets.items()))
    ]


def remaining_unassigned(total_amount: Decimal, splits: Iterable[Split]) -> Decimal:
    """Part of the total not yet covered by splits (negative if over-assigned)."""
    return total_amount - splits_total(splits)


def goal_progress(goals: Iterable[Goal]) -> list[GoalProgress]:
    return [
        GoalProgress(
            goal_id=g.id,
            name=g.name,
            current_amount=g.current_amount,
            target_amount=g.target_amount,
            fraction=g.progress,
        )
        for g in goals
    ]


def has_invested_in_month(
    transactions: Iterable[TransactionDraft],
    today: date,
    investment_category_id: str = "cat_exp_7",
) -> bool:
    """Whether any split this calendar month went to the investment category."""
    month_start = today.replace(day=1)
    return any(
        t.date >= month_start
        and any(s.category_id == investment_category_id for s in t.splits)
        for t in transactions
    )
