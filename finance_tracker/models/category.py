"""
Category Registry

Every split points at a category id. The registry maps those ids to
display names and to the transaction type they belong to.

DESIGN DECISION: The registry is an immutable object built once at startup
and handed to whoever needs it (data service, reports, forms). There is no
module-level lookup table to mutate.
"""

from enum import Enum
from typing import Iterable, Iterator, Optional

from pydantic import BaseModel, ConfigDict, Field


UNKNOWN_CATEGORY_NAME = "Unknown"


class TransactionType(str, Enum):
    """Direction of money flow."""
    INCOME = "income"
    EXPENSE = "expense"


class Category(BaseModel):
    """A single category a split can be assigned to."""
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1, max_length=100)
    type: TransactionType


class CategoryRegistry:
    """
    Read-only lookup over a fixed list of categories.

    Declaration order matters: the first category of a kind is the default
    selection, and list_by_kind() returns categories in that order.
    """

    def __init__(self, categories: Iterable[Category]):
        ordered = tuple(categories)
        by_id: dict[str, Category] = {}
        for category in ordered:
            if category.id in by_id:
                raise ValueError(f"Duplicate category id: {category.id}")
            by_id[category.id] = category
        self._categories = ordered
        self._by_id = by_id

    def __iter__(self) -> Iterator[Category]:
        return iter(self._categories)

    def __len__(self) -> int:
        return len(self._categories)

    def __contains__(self, category_id: object) -> bool:
        return category_id in self._by_id

    def get(self, category_id: str) -> Optional[Category]:
        return self._by_id.get(category_id)

    def resolve(self, category_id: str) -> str:
        """Return the display name for an id, or "Unknown". Never raises."""
        category = self._by_id.get(category_id)
        return category.name if category else UNKNOWN_CATEGORY_NAME

    def list_by_kind(self, kind: TransactionType) -> tuple[Category, ...]:
        kind = TransactionType(kind)
        return tuple(c for c in self._categories if c.type == kind)

    def default_category(self, kind: TransactionType) -> Category:
        """First declared category of a kind."""
        categories = self.list_by_kind(kind)
        if not categories:
            raise LookupError(f"No categories registered for {TransactionType(kind).value}")
        return categories[0]


INCOME_CATEGORIES = (
    Category(id="cat_inc_1", name="Salary", type=TransactionType.INCOME),
    Category(id="cat_inc_2", name="Freelance", type=TransactionType.INCOME),
    Category(id="cat_inc_3", name="Investment Gains", type=TransactionType.INCOME),
    Category(id="cat_inc_4", name="Other", type=TransactionType.INCOME),
)

EXPENSE_CATEGORIES = (
    Category(id="cat_exp_1", name="Housing", type=TransactionType.EXPENSE),
    Category(id="cat_exp_2", name="Transport", type=TransactionType.EXPENSE),
    Category(id="cat_exp_3", name="Food & Groceries", type=TransactionType.EXPENSE),
    Category(id="cat_exp_4", name="Utilities", type=TransactionType.EXPENSE),
    Category(id="cat_exp_5", name="Entertainment", type=TransactionType.EXPENSE),
    Category(id="cat_exp_6", name="Health", type=TransactionType.EXPENSE),
    Category(id="cat_exp_7", name="Investment", type=TransactionType.EXPENSE),
    Category(id="cat_exp_8", name="Goal Contributions", type=TransactionType.EXPENSE),
    Category(id="cat_exp_9", name="Other", type=TransactionType.EXPENSE),
)


def default_registry() -> CategoryRegistry:
    """Registry with the built-in income and expense categories."""
    return CategoryRegistry(INCOME_CATEGORIES + EXPENSE_CATEGORIES)
