"""
Transaction filtering for the history view.

All criteria are optional and combined with AND. Input order is kept,
since the store already returns transactions sorted by date.
"""

from datetime import date
from typing import Iterable, Optional, TypeVar

from pydantic import BaseModel, model_validator

from finance_tracker.models import TransactionDraft, TransactionType


T = TypeVar("T", bound=TransactionDraft)


class TransactionFilter(BaseModel):
    """Criteria for filter_transactions()."""

    type: Optional[TransactionType] = None
    category_id: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None

    @model_validator(mode='after')
    def validate_range(self) -> 'TransactionFilter':
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError("End date cannot be before start date")
        return self

    def matches(self, transaction: TransactionDraft) -> bool:
        if self.type is not None and transaction.type != self.type:
            return False
        if self.category_id is not None and not any(
            s.category_id == self.category_id for s in transaction.splits
        ):
            return False
        # Both bounds are inclusive
        if self.start_date is not None and transaction.date < self.start_date:
            return False
        if self.end_date is not None and transaction.date > self.end_date:
            return False
        return True


def filter_transactions(
    transactions: Iterable[T],
    criteria: Optional[TransactionFilter] = None,
) -> list[T]:
    if criteria is None:
        return list(transactions)
    return [t for t in transactions if criteria.matches(t)]
