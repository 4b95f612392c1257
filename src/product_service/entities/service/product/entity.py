"""Entity: Product."""

from decimal import Decimal
from typing import Any
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, field_serializer

from src.product_service.entities.core._base import Entity


class Product(Entity):
    """Product entity as returned to clients.

    Every field has a zero value, so ``Product()`` is the zero-valued record.
    """

    model_config = ConfigDict(from_attributes=True)

    code: str = Field(default="", description="Short product code")
    name: str = Field(default="", description="Product name")
    price: Decimal = Field(default=Decimal("0"), description="Unit price")
    price2: Decimal = Field(
        default=Decimal("0"), description="Copy of the price taken at creation"
    )
    stock: int = Field(default=0, description="Units in stock")

    @field_serializer("price", "price2", when_used="json")
    def _plain_decimal(self, value: Decimal) -> str:
        # Storage pads to two places; clients get the shortest exact form
        return f"{value.normalize():f}"


class ProductCreate(BaseModel):
    """Body of a create request.

    Client supplied ``id``, ``uuid`` and ``price2`` keys are ignored; the server
    assigns the first two and derives ``price2`` from ``price``.
    """

    model_config = ConfigDict(extra="ignore")

    code: str = ""
    name: str = ""
    price: Decimal = Decimal("0")
    stock: int = 0

    def to_entity(self) -> Product:
        return Product(
            uuid=uuid4(),
            code=self.code,
            name=self.name,
            price=self.price,
            price2=self.price,
            stock=self.stock,
        )


class ProductUpdate(BaseModel):
    """Body of an update request. Only the fields present are applied."""

    model_config = ConfigDict(extra="ignore")

    code: str | None = None
    name: str | None = None
    price: Decimal | None = None
    price2: Decimal | None = None
    stock: int | None = None

    def changes(self) -> dict[str, Any]:
        """Fields sent by the client, without explicit nulls."""
        return self.model_dump(exclude_unset=True, exclude_none=True)
