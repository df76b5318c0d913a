"""
Dashboard endpoint for API v1.

Returns the headline figures of the inventory: how many products are
registered, the total value of the stock (price times quantity) and
how many products are below the low-stock threshold.
"""

from fastapi import APIRouter, Depends, Request

from inventory_api.app.schemas.product import InventorySummary
from inventory_api.app.services.product_service import ProductService, get_product_service
from inventory_api.app.services.report_service import ReportService

router = APIRouter()


@router.get("/summary", response_model=InventorySummary)
async def get_summary(
    request: Request,
    service: ProductService = Depends(get_product_service),
) -> InventorySummary:
    products = await service.list_products()
    return ReportService(request.app.state.settings).summary(products)
