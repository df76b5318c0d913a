"""
Report endpoints for API v1.

``GET /reports/html`` builds the stock report from the current product
list and returns it as a downloadable HTML attachment.
"""

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse

from inventory_api.app.services.product_service import ProductService, get_product_service
from inventory_api.app.services.report_service import REPORT_FILENAME, ReportService

router = APIRouter()

logger = logging.getLogger(__name__)


@router.get("/html", response_class=HTMLResponse)
async def download_html_report(
    request: Request,
    service: ProductService = Depends(get_product_service),
) -> HTMLResponse:
    """Return the inventory report as an HTML file download."""
    products = await service.list_products()
    report = ReportService(request.app.state.settings)
    html_report = report.render_html(products)
    logger.info("Generated inventory report with %d products", len(products))
    return HTMLResponse(
        content=html_report,
        headers={"Content-Disposition": f"attachment; filename={REPORT_FILENAME}"},
    )
