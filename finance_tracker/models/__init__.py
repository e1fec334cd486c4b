"""
Data Models Package

Pydantic models for categories, transactions and goals, plus the
validation errors raised when building new ones.
"""

from finance_tracker.models.category import (
    EXPENSE_CATEGORIES,
    INCOME_CATEGORIES,
    UNKNOWN_CATEGORY_NAME,
    Category,
    CategoryRegistry,
    TransactionType,
    default_registry,
)
from finance_tracker.models.errors import (
    CategoryKindMismatchError,
    EmptyDescriptionError,
    EmptyNameError,
    EmptySplitsError,
    InvalidAmountError,
    InvalidDateError,
    MissingCategoryError,
    SplitMismatchError,
    ValidationError,
)
from finance_tracker.models.goal import (
    Goal,
    GoalDraft,
    build_goal,
    progress_fraction,
)
from finance_tracker.models.transaction import (
    SPLIT_TOLERANCE,
    Split,
    Transaction,
    TransactionDraft,
    build_transaction,
    splits_total,
)

__all__ = [
    # Categories
    "EXPENSE_CATEGORIES",
    "INCOME_CATEGORIES",
    "UNKNOWN_CATEGORY_NAME",
    "Category",
    "CategoryRegistry",
    "TransactionType",
    "default_registry",
    # Errors
    "CategoryKindMismatchError",
    "EmptyDescriptionError",
    "EmptyNameError",
    "EmptySplitsError",
    "InvalidAmountError",
    "InvalidDateError",
    "MissingCategoryError",
    "SplitMismatchError",
    "ValidationError",
    # Goals
    "Goal",
    "GoalDraft",
    "build_goal",
    "progress_fraction",
    # Transactions
    "SPLIT_TOLERANCE",
    "Split",
    "Transaction",
    "TransactionDraft",
    "build_transaction",
    "splits_total",
]
