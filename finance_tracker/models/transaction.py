"""
Transaction Models

A transaction has one total and one or more splits. Each split assigns
part of the total to a category. The splits must add up to the total
(within one cent) before a transaction is allowed to leave the client.

DESIGN DECISION: build_transaction() is the only way the client creates
new transactions. It raises a typed ValidationError instead of a pydantic
error so the form can show a single clear message.

Transactions loaded from the store skip these rules and only need the
right field types. The store is the system of record.
"""

from datetime import date
from decimal import Decimal
from typing import Any, Iterable, Optional

import pydantic
from pydantic import Field

from finance_tracker.models.base import Amount, IsoDate, WireModel, to_decimal
from finance_tracker.models.category import CategoryRegistry, TransactionType
from finance_tracker.models.errors import (
    CategoryKindMismatchError,
    EmptyDescriptionError,
    EmptySplitsError,
    InvalidAmountError,
    MissingCategoryError,
    SplitMismatchError,
)


SPLIT_TOLERANCE = Decimal("0.01")


class Split(WireModel):
    """Portion of a transaction's total attributed to one category."""

    category_id: str = Field(..., min_length=1)
    amount: Amount = Field(..., ge=0)


class TransactionDraft(WireModel):
    """
    A validated transaction that has not been stored yet.

    There is no id: the store assigns it on creation.
    """

    date: IsoDate
    description: str
    total_amount: Amount
    type: TransactionType
    splits: tuple[Split, ...] = ()

    @property
    def splits_total(self) -> Decimal:
        return splits_total(self.splits)

    @property
    def is_split(self) -> bool:
        return len(self.splits) > 1

    @property
    def signed_amount(self) -> Decimal:
        """Total with expenses negative."""
        if self.type == TransactionType.EXPENSE:
            return -self.total_amount
        return self.total_amount


class Transaction(TransactionDraft):
    """A transaction as returned by the store."""

    id: str = Field(..., min_length=1)


def splits_total(splits: Iterable[Split]) -> Decimal:
    return sum((s.amount for s in splits), Decimal("0"))


def _coerce_split(value: Any, position: int) -> Split:
    if isinstance(value, Split):
        return value
    if isinstance(value, tuple) and len(value) == 2:
        category_id, amount = value
        value = {"category_id": category_id, "amount": amount}
    if not isinstance(value, dict):
        raise InvalidAmountError(
            f"Split {position + 1} must be a Split, a (category, amount) pair or a dict.",
            field="splits",
        )

    category_id = value.get("category_id", value.get("categoryId"))
    if category_id is None or not str(category_id).strip():
        raise MissingCategoryError(f"Split {position + 1} needs a category.")
    try:
        return Split(category_id=category_id, amount=to_decimal(value.get("amount")))
    except (pydantic.ValidationError, ValueError):
        raise InvalidAmountError(
            f"Split {position + 1} needs an amount of zero or more.",
            field="splits",
        ) from None


def build_transaction(
    date: date,
    description: str,
    total_amount: Any,
    type: TransactionType,
    splits: Iterable[Any],
    *,
    tolerance: Decimal = SPLIT_TOLERANCE,
    registry: Optional[CategoryRegistry] = None,
    enforce_category_kind: bool = False,
) -> TransactionDraft:
    """
    Validate user input and build a transaction draft.

    Args:
        date: Transaction date
        description: Free text, must not be blank
        total_amount: Total, must be > 0
        type: Income or expense
        splits: Split objects, (category_id, amount) pairs or dicts,
                kept in the given order
        tolerance: Allowed gap between sum of splits and total
        registry: Needed only when enforce_category_kind is set
        enforce_category_kind: Reject splits whose category belongs
                               to the other transaction type

    Returns:
        TransactionDraft ready to submit

    Raises:
        InvalidAmountError, EmptyDescriptionError, EmptySplitsError,
        MissingCategoryError, SplitMismatchError, CategoryKindMismatchError
    """
    try:
        total = to_decimal(total_amount)
    except ValueError:
        raise InvalidAmountError("Total amount must be a number greater than zero.") from None
    if total <= 0:
        raise InvalidAmountError("Total amount must be greater than zero.")

    if description is None or not str(description).strip():
        raise EmptyDescriptionError("Description is required.")

    kind = TransactionType(type)
    split_list = [_coerce_split(s, i) for i, s in enumerate(splits)]
    if not split_list:
        raise EmptySplitsError("Add at least one category split.")

    assigned = splits_total(split_list)
    if abs(assigned - total) > tolerance:
        raise SplitMismatchError(
            f"Split amounts (${assigned:.2f}) must sum up to the total amount (${total:.2f}).",
            splits_total=assigned,
            total_amount=total,
        )

    if enforce_category_kind:
        if registry is None:
            raise ValueError("enforce_category_kind requires a category registry")
        for split in split_list:
            category = registry.get(split.category_id)
            if category is not None and category.type != kind:
                raise CategoryKindMismatchError(
                    f"'{category.name}' is an {category.type.value} category and "
                    f"cannot be used on an {kind.value} transaction."
                )

    return TransactionDraft(
        date=date,
        description=str(description).strip(),
        total_amount=total,
        type=kind,
        splits=tuple(split_list),
    )
