"""
Product endpoints for API v1.

These routes expose the five catalog operations.  Handlers are thin:
they resolve the ``ProductService`` owned by the application, call it,
and translate service errors to HTTP responses.  A missing product
yields 404 with ``"Product with ID <id> not found"``; a product whose
serialized form exceeds the record size ceiling yields 413.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Path, Request, status

from vegan_catalog_api.app.schemas.product import MAX_UINT64, Product, ProductPayload
from vegan_catalog_api.app.services.product_service import ProductNotFoundError, ProductService
from vegan_catalog_api.app.services.product_store import RecordTooLargeError

router = APIRouter()


def get_product_service(request: Request) -> ProductService:
    """Return the service instance created by ``create_app``."""
    return request.app.state.product_service


ProductId = Annotated[int, Path(ge=0, le=MAX_UINT64, description="Product identifier")]


def _not_found(exc: ProductNotFoundError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))


def _too_large(exc: RecordTooLargeError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE, detail=str(exc))


@router.get("/{product_id}", response_model=Product)
async def get_product(
    product_id: ProductId,
    service: ProductService = Depends(get_product_service),
) -> Product:
    """Retrieve a single product by its ID."""
    try:
        return await service.get_product(product_id)
    except ProductNotFoundError as e:
        raise _not_found(e) from e


@router.post("/", response_model=Product, status_code=status.HTTP_201_CREATED)
async def add_product(
    payload: ProductPayload,
    service: ProductService = Depends(get_product_service),
) -> Product:
    """Create a new product.

    The identifier, ``created_at`` timestamp and ``availability=true``
    are assigned by the server.
    """
    try:
        return await service.create_product(payload)
    except RecordTooLargeError as e:
        raise _too_large(e) from e


@router.put("/{product_id}", response_model=Product)
async def update_product(
    payload: ProductPayload,
    product_id: ProductId,
    service: ProductService = Depends(get_product_service),
) -> Product:
    """Replace name, description, price and seller of a product."""
    try:
        return await service.update_product(product_id, payload)
    except ProductNotFoundError as e:
        raise _not_found(e) from e
    except RecordTooLargeError as e:
        raise _too_large(e) from e


@router.delete("/{product_id}", response_model=Product)
async def delete_product(
    product_id: ProductId,
    service: ProductService = Depends(get_product_service),
) -> Product:
    """Delete a product and return its last state."""
    try:
        return await service.delete_product(product_id)
    except ProductNotFoundError as e:
        raise _not_found(e) from e


@router.patch("/{product_id}/availability", response_model=Product)
async def toggle_availability(
    product_id: ProductId,
    service: ProductService = Depends(get_product_service),
) -> Product:
    """Flip the availability flag of a product."""
    try:
        return await service.toggle_availability(product_id)
    except ProductNotFoundError as e:
        raise _not_found(e) from e
