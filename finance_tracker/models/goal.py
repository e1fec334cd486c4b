"""
Savings Goal Models

A goal is a target amount with a deadline. The client only creates goals;
the store tracks how much has been saved (current_amount) and the client
just reads it back.
"""

from datetime import date
from decimal import Decimal
from typing import Any, Optional

from pydantic import Field

from finance_tracker.models.base import Amount, IsoDate, WireModel, to_decimal
from finance_tracker.models.errors import (
    EmptyNameError,
    InvalidAmountError,
    InvalidDateError,
)


class GoalDraft(WireModel):
    """A validated goal that has not been stored yet."""

    name: str
    target_amount: Amount
    target_date: IsoDate


class Goal(GoalDraft):
    """A goal as returned by the store."""

    id: str = Field(..., min_length=1)
    current_amount: Amount = Field(default=Decimal("0"), ge=0)

    @property
    def progress(self) -> float:
        return progress_fraction(self)

    @property
    def progress_percent(self) -> float:
        return progress_fraction(self) * 100

    @property
    def remaining_amount(self) -> Decimal:
        """How much is still missing, never negative."""
        return max(self.target_amount - self.current_amount, Decimal("0"))

    @property
    def is_reached(self) -> bool:
        return self.current_amount >= self.target_amount


def progress_fraction(goal: Goal) -> float:
    """current / target, clamped to [0, 1]."""
    if goal.target_amount <= 0:
        return 0.0
    fraction = float(goal.current_amount / goal.target_amount)
    return min(max(fraction, 0.0), 1.0)


def build_goal(
    name: str,
    target_amount: Any,
    target_date: date,
    today: Optional[date] = None,
) -> GoalDraft:
    """
    Validate user input and build a goal draft.

    Raises:
        InvalidAmountError: target_amount is not > 0
        EmptyNameError: name is blank
        InvalidDateError: target_date is before today
    """
    try:
        target = to_decimal(target_amount)
    except ValueError:
        raise InvalidAmountError("Target amount must be a number greater than zero.") from None
    if target <= 0:
        raise InvalidAmountError("Target amount must be greater than zero.")

    if name is None or not str(name).strip():
        raise EmptyNameError("Goal name is required.")

    today = today or date.today()
    if target_date is None or target_date < today:
        raise InvalidDateError("Target date cannot be in the past.")

    return GoalDraft(
        name=str(name).strip(),
        target_amount=target,
        target_date=target_date,
    )
