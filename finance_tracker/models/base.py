"""
Shared building blocks for the wire-facing models.

The store speaks camelCase JSON with numeric amounts and ISO dates.
Python code uses snake_case attributes and Decimal amounts.
"""

from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, PlainSerializer
from pydantic.alias_generators import to_camel


def _date_part(value: Any) -> Any:
    """Accept full ISO timestamps ("2024-01-15T00:00:00.000Z") as dates."""
    if isinstance(value, str) and "T" in value:
        return value.split("T", 1)[0]
    return value


# Amounts stay Decimal in Python and go out as JSON numbers
Amount = Annotated[
    Decimal,
    PlainSerializer(float, return_type=float, when_used="json"),
]

IsoDate = Annotated[date, BeforeValidator(_date_part)]


class WireModel(BaseModel):
    """Immutable model with camelCase aliases for the REST API."""
    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
        coerce_numbers_to_str=True,
        str_strip_whitespace=True,
    )

    def to_payload(self) -> dict:
        """JSON-ready dict using the API's field names."""
        return self.model_dump(mode="json", by_alias=True)


def to_decimal(value: Any) -> Decimal:
    """
    Convert user input (str, int, float, Decimal) to Decimal.

    Floats go through str() so 0.1 stays 0.1.
    Raises ValueError for anything that is not a finite number.
    """
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, bool) or value is None:
        raise ValueError(f"Not an amount: {value!r}")
    else:
        text = str(value).strip()
        if not text:
            raise ValueError("Amount is empty")
        try:
            result = Decimal(text)
        except InvalidOperation:
            raise ValueError(f"Not an amount: {value!r}") from None
    if not result.is_finite():
        raise ValueError(f"Not an amount: {value!r}")
    return result
