"""Product API router with CRUD operations."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, status
from loguru import logger
from sqlmodel import Session
from starlette.responses import Response

from src.product_service.api.http.deps import get_db_session
from src.product_service.api.http.envelope import write_error, write_result
from src.product_service.entities.service.product import (
    Product,
    ProductCreate,
    ProductRepository,
    ProductUpdate,
)

router = APIRouter()

NOT_FOUND_MESSAGE = "Product not found"

# Largest id the BIGINT key column can hold
MAX_PRODUCT_ID = 2**63 - 1
ProductId = Annotated[int, Path(le=MAX_PRODUCT_ID)]


@router.post("")
def create_product(
    payload: ProductCreate,
    session: Session = Depends(get_db_session),
) -> Response:
    """Create a new product with a fresh UUID and price2 copied from price."""
    repository = ProductRepository(session)
    created_product = repository.create(payload.to_entity())
    session.commit()
    logger.info("Created product {} ({})", created_product.id, created_product.uuid)
    return write_result(created_product, "Success create product")


@router.get("")
def list_products(
    session: Session = Depends(get_db_session),
) -> Response:
    """List all products."""
    repository = ProductRepository(session)
    return write_result(repository.list_all(), "Success get products")


@router.get("/{product_id}")
def get_product(
    product_id: ProductId,
    session: Session = Depends(get_db_session),
) -> Response:
    """Get a product by ID.

    An unknown ID answers with the zero-valued product rather than a 404.
    """
    repository = ProductRepository(session)
    product = repository.get(product_id)
    if product is None:
        logger.debug("Product {} not found, returning zero-valued record", product_id)
        product = Product()
    return write_result(product, "Success get product")


@router.put("/{product_id}")
def update_product(
    product_id: ProductId,
    payload: ProductUpdate,
    session: Session = Depends(get_db_session),
) -> Response:
    """Update the fields present in the body.

    The response carries the product as it was before the update.
    """
    repository = ProductRepository(session)
    product = repository.get(product_id)
    if product is None:
        return write_error(status.HTTP_404_NOT_FOUND, NOT_FOUND_MESSAGE)

    repository.update(product_id, payload.changes())
    session.commit()
    return write_result(product, "Success update product")


@router.delete("/{product_id}")
def delete_product(
    product_id: ProductId,
    session: Session = Depends(get_db_session),
) -> Response:
    """Delete a product and echo the deleted record."""
    repository = ProductRepository(session)
    product = repository.delete(product_id)
    if product is None:
        return write_error(status.HTTP_404_NOT_FOUND, NOT_FOUND_MESSAGE)

    session.commit()
    return write_result(product, "Success delete product")
