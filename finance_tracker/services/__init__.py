"""Services package."""

from finance_tracker.services.data_service import DashboardSummary, FinanceDataService
from finance_tracker.services.store import (
    FinanceData,
    FinanceStoreInterface,
    HttpFinanceStore,
    InMemoryFinanceStore,
    InvalidResponseError,
    StoreError,
    TransportError,
)

__all__ = [
    "DashboardSummary",
    "FinanceData",
    "FinanceDataService",
    "FinanceStoreInterface",
    "HttpFinanceStore",
    "InMemoryFinanceStore",
    "InvalidResponseError",
    "StoreError",
    "TransportError",
]
