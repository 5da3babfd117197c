"""Cart models for the storefront"""

from decimal import Decimal
from typing import Annotated, Any, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, PlainSerializer, TypeAdapter
from pydantic.alias_generators import to_camel


def _exact_decimal(value: Any) -> Any:
    # JSON numbers arrive as floats; 49.99 must come back as Decimal("49.99")
    if isinstance(value, float):
        return Decimal(str(value))
    return value


# Currency amount: exact Decimal in Python, a number in JSON
Money = Annotated[
    Decimal,
    BeforeValidator(_exact_decimal),
    PlainSerializer(float, return_type=float, when_used="json"),
]


class CamelModel(BaseModel):
    """Base model serialized with camelCase field names"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CartItem(CamelModel):
    """Product variant a page hands to the cart"""
    product_id: str
    name: str
    unit_price: Money = Field(ge=0)
    size_variant: Optional[str] = None
    image_ref: str = ""

    @property
    def key(self) -> tuple[str, Optional[str]]:
        """Uniqueness key of a cart line"""
        return (self.product_id, self.size_variant)


class CartLine(CartItem):
    """One distinct product + size entry with its quantity"""
    quantity: int = Field(ge=1)

    @property
    def line_total(self) -> Decimal:
        return self.unit_price * self.quantity


CART_LINES = TypeAdapter(list[CartLine])


def dump_lines(lines: list[CartLine]) -> str:
    """Serialize cart lines to the stored JSON array"""
    return CART_LINES.dump_json(lines, by_alias=True).decode("utf-8")


def load_lines(raw: str) -> list[CartLine]:
    """Parse the stored JSON array back into cart lines"""
    return CART_LINES.validate_json(raw)
