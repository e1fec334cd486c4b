"""
Validation errors raised while building new entities.

These are local and recoverable: the caller shows the message next to the
form and nothing is sent to the store.
"""


class ValidationError(Exception):
    """Base exception for entity construction failures."""

    field: str = ""

    def __init__(self, message: str, field: str = ""):
        self.message = message
        if field:
            self.field = field
        super().__init__(message)


class InvalidAmountError(ValidationError):
    """Amount must be strictly positive."""
    field = "amount"


class EmptyDescriptionError(ValidationError):
    """Transaction description is blank."""
    field = "description"


class EmptySplitsError(ValidationError):
    """A transaction needs at least one split."""
    field = "splits"


class SplitMismatchError(ValidationError):
    """Splits do not add up to the transaction total."""
    field = "splits"

    def __init__(self, message: str, splits_total, total_amount):
        self.splits_total = splits_total
        self.total_amount = total_amount
        super().__init__(message)


class MissingCategoryError(ValidationError):
    """A split has no category."""
    field = "splits"


class CategoryKindMismatchError(ValidationError):
    """A split references a category of the other transaction type."""
    field = "splits"


class EmptyNameError(ValidationError):
    """Goal name is blank."""
    field = "name"


class InvalidDateError(ValidationError):
    """Goal target date lies in the past."""
    field = "target_date"
