"""Shared model configuration"""

from decimal import Decimal
from typing import Annotated, Any, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, PlainSerializer
from pydantic.alias_generators import to_camel


def _exact_decimal(value: Any) -> Any:
    if isinstance(value, float):
        return Decimal(str(value))
    return value


# Prices and totals are exact decimals, sent as JSON numbers
Money = Annotated[
    Decimal,
    BeforeValidator(_exact_decimal),
    PlainSerializer(float, return_type=float, when_used="json"),
]


class CamelModel(BaseModel):
    """Model serialized with camelCase field names"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ApiResponse(BaseModel):
    """Response envelope used by every endpoint"""
    success: bool = True
    message: Optional[str] = None
    data: Any = None
