"""Data-access layer for products."""

from typing import Any

from sqlmodel import Session, select

from .entity import Product
from .table import ProductTable

# Columns a client may never change
_KEY_FIELDS = frozenset({"id", "uuid"})


class ProductRepository:
    """Maps Product entities onto the products table.

    The repository flushes but never commits; the caller owns the transaction.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def create(self, product: Product) -> Product:
        row = ProductTable(**product.model_dump(exclude={"id"}))
        self._session.add(row)
        self._session.flush()
        self._session.refresh(row)
        return Product.model_validate(row)

    def get(self, product_id: int) -> Product | None:
        row = self._session.get(ProductTable, product_id)
        if row is None:
            return None
        return Product.model_validate(row)

    def list_all(self) -> list[Product]:
        rows = self._session.exec(select(ProductTable).order_by(ProductTable.id)).all()
        return [Product.model_validate(row) for row in rows]

    def update(self, product_id: int, changes: dict[str, Any]) -> Product | None:
        """Apply ``changes`` field by field and return the stored result."""
        row = self._session.get(ProductTable, product_id)
        if row is None:
            return None

        for field, value in changes.items():
            if field in _KEY_FIELDS:
                continue
            setattr(row, field, value)

        self._session.add(row)
        self._session.flush()
        self._session.refresh(row)
        return Product.model_validate(row)

    def delete(self, product_id: int) -> Product | None:
        """Delete a product, returning what was stored before deletion."""
        row = self._session.get(ProductTable, product_id)
        if row is None:
            return None

        product = Product.model_validate(row)
        self._session.delete(row)
        self._session.flush()
        return product
