"""
Entry Workflows

Editable state behind the "new transaction" and "new goal" dialogs.

The transaction form owns the default-split policy:
- switching the type throws away the splits and puts in one split of the
  new type's first category covering the current total;
- while there is a single split that has not been edited by hand, changing
  the total moves the split amount with it.

Validation runs in build(); submit() only reaches the data service with a
valid draft. Store errors leave the form open with the message in `error`.
"""

from datetime import date
from decimal import Decimal
from typing import Any, Optional

from finance_tracker.audit import create_correlation_id
from finance_tracker.models import (
    Category,
    CategoryRegistry,
    Goal,
    GoalDraft,
    SPLIT_TOLERANCE,
    Split,
    Transaction,
    TransactionDraft,
    TransactionType,
    ValidationError,
    build_goal,
    build_transaction,
    default_registry,
)
from finance_tracker.models.base import to_decimal
from finance_tracker.reports import remaining_unassigned
from finance_tracker.services import FinanceDataService, StoreError


ZERO = Decimal("0")
GENERIC_SUBMIT_ERROR = "Failed to submit transaction. Please try again."
GENERIC_GOAL_ERROR = "Failed to create goal. Please try again."


def _parse_amount(value: Any) -> Decimal:
    """Lenient parse for live input: anything unparsable counts as zero."""
    try:
        return to_decimal(value)
    except ValueError:
        return ZERO


class TransactionForm:
    """State of the add-transaction dialog."""

    def __init__(
        self,
        registry: Optional[CategoryRegistry] = None,
        today: Optional[date] = None,
        tolerance: Decimal = SPLIT_TOLERANCE,
        enforce_category_kind: bool = False,
    ):
        self._registry = registry or default_registry()
        self._tolerance = tolerance
        self._enforce_category_kind = enforce_category_kind
        self.reset(today)

    def reset(self, today: Optional[date] = None) -> None:
        self.type = TransactionType.EXPENSE
        self.description = ""
        self.date = today or date.today()
        self.total_amount = ZERO
        self.splits: list[Split] = [self._default_split(TransactionType.EXPENSE, ZERO)]
        self.error = ""
        self.is_submitting = False
        self._splits_edited = False

    def _default_split(self, kind: TransactionType, amount: Decimal) -> Split:
        return Split(category_id=self._registry.default_category(kind).id, amount=amount)

    @property
    def available_categories(self) -> tuple[Category, ...]:
        return self._registry.list_by_kind(self.type)

    @property
    def remaining(self) -> Decimal:
        """Unassigned part of the total, shown live under the splits."""
        return remaining_unassigned(self.total_amount, self.splits)

    @property
    def is_balanced(self) -> bool:
        return abs(self.remaining) <= self._tolerance

    def set_type(self, kind: TransactionType) -> None:
        self.type = TransactionType(kind)
        self.splits = [self._default_split(self.type, self.total_amount)]
        self._splits_edited = False

    def set_total_amount(self, amount: Any) -> None:
        self.total_amount = _parse_amount(amount)
        if len(self.splits) == 1 and not self._splits_edited:
            self.splits = [self.splits[0].model_copy(update={"amount": self.total_amount})]

    def add_split(self) -> None:
        self.splits.append(self._default_split(self.type, ZERO))
        self._splits_edited = True

    def remove_split(self, index: int) -> None:
        """Drop a split. The last remaining split cannot be removed."""
        if len(self.splits) <= 1:
            return
        del self.splits[index]

    def set_split_amount(self, index: int, amount: Any) -> None:
        parsed = max(_parse_amount(amount), ZERO)
        self.splits[index] = self.splits[index].model_copy(update={"amount": parsed})
        self._splits_edited = True

    def set_split_category(self, index: int, category_id: str) -> None:
        self.splits[index] = self.splits[index].model_copy(update={"category_id": category_id})

    def build(self) -> TransactionDraft:
        return build_transaction(
            date=self.date,
            description=self.description,
            total_amount=self.total_amount,
            type=self.type,
            splits=self.splits,
            tolerance=self._tolerance,
            registry=self._registry,
            enforce_category_kind=self._enforce_category_kind,
        )

    async def submit(self, service: FinanceDataService) -> Optional[Transaction]:
        """
        Validate and save.

        Returns the created transaction, or None with `error` set.
        """
        correlation_id = create_correlation_id()
        try:
            draft = self.build()
        except ValidationError as e:
            self.error = e.message
            await service.audit_logger.log_validation_failed(
                entity_type="transaction",
                field=e.field,
                error_message=e.message,
                correlation_id=correlation_id,
            )
            return None

        self.error = ""
        self.is_submitting = True
        try:
            return await service.add_transaction(draft, correlation_id=correlation_id)
        except StoreError as e:
            self.error = str(e) or GENERIC_SUBMIT_ERROR
            return None
        finally:
            self.is_submitting = False


class GoalForm:
    """State of the new-goal dialog."""

    def __init__(self, today: Optional[date] = None):
        self._today = today
        self.reset()

    def reset(self) -> None:
        self.name = ""
        self.target_amount: Any = ""
        self.target_date: Optional[date] = None
        self.error = ""
        self.is_submitting = False

    def build(self) -> GoalDraft:
        return build_goal(
            name=self.name,
            target_amount=self.target_amount,
            target_date=self.target_date,
            today=self._today,
        )

    async def submit(self, service: FinanceDataService) -> Optional[Goal]:
        """Returns the created goal, or None with `error` set."""
        correlation_id = create_correlation_id()
        try:
            draft = self.build()
        except ValidationError as e:
            self.error = e.message
            await service.audit_logger.log_validation_failed(
                entity_type="goal",
                field=e.field,
                error_message=e.message,
                correlation_id=correlation_id,
            )
            return None

        self.error = ""
        self.is_submitting = True
        try:
            return await service.add_goal(draft, correlation_id=correlation_id)
        except StoreError as e:
            self.error = str(e) or GENERIC_GOAL_ERROR
            return None
        finally:
            self.is_submitting = False
