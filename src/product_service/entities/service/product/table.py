"""Product database table model."""

from decimal import Decimal

from sqlalchemy import BigInteger
from sqlmodel import Field

from src.product_service.entities.core._base import EntityTable


class ProductTable(EntityTable, table=True):
    """Database persistence model for products.

    This represents how the Product entity is stored in the database.
    It's separate from the domain entity to maintain clean architecture
    while keeping related code together.
    """

    __tablename__ = "products"

    code: str = Field(default="", max_length=255)
    name: str = Field(default="", max_length=255)
    price: Decimal = Field(default=Decimal("0"), max_digits=15, decimal_places=2)
    price2: Decimal = Field(default=Decimal("0"), max_digits=15, decimal_places=2)
    stock: int = Field(default=0, sa_type=BigInteger)
