"""Base configuration for Bittrex result shapes.

All DTOs inherit from BittrexModel which:
- maps snake_case attributes to the exchange's PascalCase JSON names
- accepts either name on input (populate_by_name)
- ignores fields the exchange adds later
- parses money/quantity fields to Decimal via str() so floats keep their
  printed representation
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, PlainSerializer
from pydantic.alias_generators import to_pascal


def parse_decimal(v: Any) -> Decimal:
    """Parse value to Decimal safely.

    Accepts:
    - Decimal (passthrough)
    - str (parsed to Decimal)
    - int (converted via string to avoid precision loss)
    - float (converted via string)
    """
    if isinstance(v, bool):
        raise ValueError("Cannot convert bool to Decimal")
    if isinstance(v, Decimal):
        return v
    if isinstance(v, (int, float, str)):
        try:
            return Decimal(str(v))
        except InvalidOperation as e:
            raise ValueError(f"Invalid decimal: {v!r}") from e
    raise ValueError(f"Cannot convert {type(v).__name__} to Decimal")


def decimal_serializer(value: Decimal) -> str:
    """Serialize Decimal to string for JSON."""
    return str(value)


# Decimal field that accepts JSON numbers and strings and dumps as string
DecimalValue = Annotated[
    Decimal,
    BeforeValidator(parse_decimal),
    PlainSerializer(decimal_serializer, when_used="json"),
]


class BittrexModel(BaseModel):
    """Base class for all Bittrex result shapes."""

    model_config = ConfigDict(
        alias_generator=to_pascal,
        populate_by_name=True,
        extra="ignore",
    )

    def to_api_dict(self) -> dict[str, Any]:
        """Dump using the exchange's field names (JSON-compatible values)."""
        return self.model_dump(mode="json", by_alias=True)
