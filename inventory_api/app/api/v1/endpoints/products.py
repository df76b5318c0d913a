"""
Product endpoints for API v1.

These routes expose CRUD operations for inventory products.  The same
router is mounted under ``/records`` at the application root and under
``/api/v1/products``.  Request bodies are validated by the
``ProductInput`` schema; invalid or incomplete bodies are answered with
HTTP 400 by the handlers registered in ``core.errors``.  Unknown
identifiers raise ``NotFoundError`` in the service and become 404.
"""

from typing import List

from fastapi import APIRouter, Depends, status

from inventory_api.app.schemas.product import DeleteResult, ProductInput, ProductRead
from inventory_api.app.services.product_service import ProductService, get_product_service

router = APIRouter()


@router.get("", response_model=List[ProductRead])
async def list_products(
    service: ProductService = Depends(get_product_service),
) -> List[ProductRead]:
    """Return all products in storage order."""
    return await service.list_products()


@router.get("/{product_id}", response_model=ProductRead)
async def get_product(
    product_id: str,
    service: ProductService = Depends(get_product_service),
) -> ProductRead:
    """Retrieve a single product by its ID.

    Returns HTTP 404 if the product does not exist.
    """
    return await service.get_product(product_id)


@router.post("", response_model=ProductRead, status_code=status.HTTP_201_CREATED)
async def create_product(
    product_in: ProductInput,
    service: ProductService = Depends(get_product_service),
) -> ProductRead:
    """Create a new product.

    ``name``, ``price`` and ``quantity`` are required.  The identifier
    and both timestamps are assigned by the store.
    """
    return await service.create_product(product_in)


@router.put("/{product_id}", response_model=ProductRead)
async def update_product(
    product_id: str,
    product_in: ProductInput,
    service: ProductService = Depends(get_product_service),
) -> ProductRead:
    """Replace the editable fields of an existing product.

    The body has the same shape as for creation.  ``id`` and
    ``createdAt`` never change; ``updatedAt`` is refreshed.
    """
    return await service.update_product(product_id, product_in)


@router.delete("/{product_id}", response_model=DeleteResult)
async def delete_product(
    product_id: str,
    service: ProductService = Depends(get_product_service),
) -> DeleteResult:
    """Delete a product.  Returns ``{"success": true}`` or HTTP 404."""
    await service.delete_product(product_id)
    return DeleteResult(success=True)
