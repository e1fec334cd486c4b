"""
In-Memory Store

Behaves like the REST API without a network: assigns ids and returns
transactions sorted by date. Used by tests and the offline demo mode.
"""

from decimal import Decimal
from itertools import count
from typing import Iterable, Optional

from finance_tracker.models import Goal, GoalDraft, Transaction, TransactionDraft
from finance_tracker.services.store.interface import (
    FinanceData,
    FinanceStoreInterface,
    TransportError,
)


class InMemoryFinanceStore(FinanceStoreInterface):
    """Process-local store. Not shared between instances."""

    def __init__(
        self,
        transactions: Iterable[Transaction] = (),
        goals: Iterable[Goal] = (),
    ):
        self._transactions: list[Transaction] = list(transactions)
        self._goals: list[Goal] = list(goals)
        self._ids = count(1)
        self._failure: Optional[str] = None
        self.fetch_count = 0

    def set_failure(self, message: str) -> None:
        """Make every call raise TransportError until clear_failure()."""
        self._failure = message

    def clear_failure(self) -> None:
        self._failure = None

    def _check(self) -> None:
        if self._failure is not None:
            raise TransportError(self._failure, status_code=503)

    def _next_id(self, prefix: str) -> str:
        return f"{prefix}_{next(self._ids)}"

    async def fetch_data(self) -> FinanceData:
        self._check()
        self.fetch_count += 1
        return FinanceData(
            transactions=tuple(sorted(self._transactions, key=lambda t: t.date)),
            goals=tuple(self._goals),
        )

    async def create_transaction(self, draft: TransactionDraft) -> Transaction:
        self._check()
        stored = Transaction(id=self._next_id("txn"), **draft.model_dump(exclude={"id"}))
        self._transactions.append(stored)
        return stored

    async def create_goal(self, draft: GoalDraft) -> Goal:
        self._check()
        stored = Goal(
            id=self._next_id("goal"),
            current_amount=Decimal("0"),
            **draft.model_dump(exclude={"id", "current_amount"}),
        )
        self._goals.append(stored)
        return stored
