"""
Store Package

Abstract store interface plus the REST and in-memory implementations.
"""

from finance_tracker.services.store.interface import (
    FinanceData,
    FinanceStoreInterface,
    InvalidResponseError,
    StoreError,
    TransportError,
)
from finance_tracker.services.store.http_store import HttpFinanceStore
from finance_tracker.services.store.memory import InMemoryFinanceStore

__all__ = [
    # Interface
    "FinanceData",
    "FinanceStoreInterface",
    # Exceptions
    "InvalidResponseError",
    "StoreError",
    "TransportError",
    # Implementations
    "HttpFinanceStore",
    "InMemoryFinanceStore",
]
