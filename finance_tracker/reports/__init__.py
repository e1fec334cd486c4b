"""Reporting package: aggregation and filtering over transaction snapshots."""

from finance_tracker.reports.filters import TransactionFilter, filter_transactions
from finance_tracker.reports.summary import (
    CategoryAmount,
    GoalProgress,
    MonthlyFlow,
    Totals,
    expense_breakdown,
    expense_by_category,
    goal_progress,
    has_invested_in_month,
    month_label,
    monthly_series,
    remaining_unassigned,
    totals,
)

__all__ = [
    "CategoryAmount",
    "GoalProgress",
    "MonthlyFlow",
    "Totals",
    "TransactionFilter",
    "expense_breakdown",
    "expense_by_category",
    "filter_transactions",
    "goal_progress",
    "has_invested_in_month",
    "month_label",
    "monthly_series",
    "remaining_unassigned",
    "totals",
]
