"""
Finance Data Service

The single owner of the in-memory transactions and goals.

GUARANTEES:
- Collections are tuples and are replaced as a whole after a successful
  load. Readers never see a half-updated collection.
- A failed reload keeps the previous data and sets `error`.
  A failed initial load leaves both collections empty.
- add_transaction() / add_goal() return only after the write AND the
  reload that follows it have finished, so the caller sees the new
  entity (and any server-side effects such as goal progress) right away.
- Store errors during a write are re-raised to the caller. The caller's
  form stays open and shows the message.
"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from finance_tracker.audit import AuditLogger, create_correlation_id
from finance_tracker.models import (
    CategoryRegistry,
    Goal,
    GoalDraft,
    Transaction,
    TransactionDraft,
    default_registry,
)
from finance_tracker.reports import (
    CategoryAmount,
    MonthlyFlow,
    Totals,
    expense_breakdown,
    monthly_series,
    totals,
)
from finance_tracker.services.store.interface import FinanceStoreInterface, StoreError


UNKNOWN_ERROR_MESSAGE = "An unknown error occurred."


class DashboardSummary(BaseModel):
    """Everything the dashboard needs, computed from one snapshot."""
    totals: Totals
    expense_breakdown: list[CategoryAmount]
    monthly: list[MonthlyFlow]


class FinanceDataService:
    """
    Facade over the store.

    Pass it to every layer that needs transaction or goal data.
    """

    def __init__(
        self,
        store: FinanceStoreInterface,
        registry: Optional[CategoryRegistry] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._store = store
        self._registry = registry or default_registry()
        self._audit_logger = audit_logger or AuditLogger()
        self._transactions: tuple[Transaction, ...] = ()
        self._goals: tuple[Goal, ...] = ()
        self._loading = True
        self._loaded_once = False
        self._error: Optional[str] = None

    # -- read accessors ---------------------------------------------------

    @property
    def transactions(self) -> tuple[Transaction, ...]:
        return self._transactions

    @property
    def goals(self) -> tuple[Goal, ...]:
        return self._goals

    @property
    def registry(self) -> CategoryRegistry:
        return self._registry

    @property
    def audit_logger(self) -> AuditLogger:
        return self._audit_logger

    @property
    def loading(self) -> bool:
        """True until the first load attempt has finished."""
        return self._loading

    @property
    def error(self) -> Optional[str]:
        """Message of the last failed load, cleared by the next successful one."""
        return self._error

    def category_name(self, category_id: str) -> str:
        return self._registry.resolve(category_id)

    def summary(self) -> DashboardSummary:
        transactions = self._transactions
        return DashboardSummary(
            totals=totals(transactions),
            expense_breakdown=expense_breakdown(transactions, self._registry),
            monthly=monthly_series(transactions),
        )

    # -- loading ----------------------------------------------------------

    async def load(self, correlation_id: Optional[UUID] = None) -> bool:
        """
        Fetch all transactions and goals from the store.

        Never raises. Returns True on success; on failure `error`
        holds the message and the previous data is kept.
        """
        initial = not self._loaded_once
        self._error = None
        try:
            data = await self._store.fetch_data()
        except StoreError as e:
            self._error = str(e) or UNKNOWN_ERROR_MESSAGE
            await self._audit_logger.log_data_load_failed(
                error_message=self._error,
                initial=initial,
                correlation_id=correlation_id,
            )
            return False
        finally:
            self._loading = False

        # Swap both references together
        self._transactions, self._goals = data.transactions, data.goals
        self._loaded_once = True
        await self._audit_logger.log_data_loaded(
            transaction_count=len(data.transactions),
            goal_count=len(data.goals),
            correlation_id=correlation_id,
        )
        return True

    # -- writes -----------------------------------------------------------

    async def add_transaction(
        self,
        draft: TransactionDraft,
        correlation_id: Optional[UUID] = None,
    ) -> Transaction:
        """
        Create a transaction, then reload everything.

        Raises:
            StoreError: The store rejected the write. Nothing changed locally.
        """
        correlation_id = correlation_id or create_correlation_id()
        try:
            created = await self._store.create_transaction(draft)
        except StoreError as e:
            await self._audit_logger.log_transaction_create_failed(
                error_message=str(e),
                correlation_id=correlation_id,
            )
            raise

        await self._audit_logger.log_transaction_created(
            transaction_id=created.id,
            transaction_type=created.type.value,
            amount=str(created.total_amount),
            split_count=len(created.splits),
            correlation_id=correlation_id,
        )
        await self.load(correlation_id=correlation_id)
        return created

    async def add_goal(
        self,
        draft: GoalDraft,
        correlation_id: Optional[UUID] = None,
    ) -> Goal:
        """
        Create a goal, then reload everything.

        The returned goal is the reloaded copy when available, since
        only the store knows the real current_amount.

        Raises:
            StoreError: The store rejected the write. Nothing changed locally.
        """
        correlation_id = correlation_id or create_correlation_id()
        try:
            created = await self._store.create_goal(draft)
        except StoreError as e:
            await self._audit_logger.log_goal_create_failed(
                error_message=str(e),
                correlation_id=correlation_id,
            )
            raise

        await self._audit_logger.log_goal_created(
            goal_id=created.id,
            name=created.name,
            target_amount=str(created.target_amount),
            correlation_id=correlation_id,
        )
        await self.load(correlation_id=correlation_id)
        for goal in self._goals:
            if goal.id == created.id:
                return goal
        return created

    async def close(self) -> None:
        await self._store.close()
