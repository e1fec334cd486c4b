"""
Abstract Store Interface

DESIGN DECISION: The data service talks to the store through this
interface. This allows us to:
1. Use the REST API in production
2. Use in-memory storage for testing and offline demos
3. Keep the data service decoupled from HTTP details

The interface only covers what the client needs: load everything,
create a transaction, create a goal. There is no update or delete.
"""

from abc import ABC, abstractmethod
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from finance_tracker.models import Goal, GoalDraft, Transaction, TransactionDraft


class FinanceData(BaseModel):
    """Everything the store holds for the user."""
    model_config = ConfigDict(frozen=True)

    transactions: tuple[Transaction, ...] = Field(default_factory=tuple)
    goals: tuple[Goal, ...] = Field(default_factory=tuple)


class FinanceStoreInterface(ABC):
    """
    Abstract interface for the remote data store.

    Implementations raise StoreError subclasses on failure.
    """

    @abstractmethod
    async def fetch_data(self) -> FinanceData:
        """
        Load all transactions and goals.

        Raises:
            TransportError: If the store cannot be reached or refuses
            InvalidResponseError: If the payload does not match the models
        """
        pass

    @abstractmethod
    async def create_transaction(self, draft: TransactionDraft) -> Transaction:
        """
        Persist a new transaction.

        Returns:
            The stored transaction with its server-assigned id

        Raises:
            TransportError: If the store rejects the write
        """
        pass

    @abstractmethod
    async def create_goal(self, draft: GoalDraft) -> Goal:
        """
        Persist a new goal.

        Returns:
            The stored goal with id and current_amount set by the store

        Raises:
            TransportError: If the store rejects the write
        """
        pass

    async def close(self) -> None:
        """Release any held connections."""
        return None


class StoreError(Exception):
    """Base exception for store operations."""
    pass


class TransportError(StoreError):
    """Store call failed or returned a non-2xx status."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


class InvalidResponseError(StoreError):
    """Store answered 2xx but the body does not match the data model."""
    pass
