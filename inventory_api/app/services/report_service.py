"""
Service layer for inventory statistics and the HTML stock report.

``ReportService.summary`` computes the figures shown on the dashboard
(number of products, total stock value and how many products are
running low).  ``ReportService.render_html`` turns the product list and
the summary into a standalone HTML document that browsers can save or
print.  Rendering uses the Jinja2 templates shipped in
``app/templates`` with autoescaping enabled, so product names and
other free text cannot inject markup into the report.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import List, Optional, Sequence

from jinja2 import Environment, FileSystemLoader, select_autoescape

from ..core.config import Settings, settings as default_settings
from ..schemas.product import InventorySummary, ProductRead


TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"

REPORT_FILENAME = "inventory-report.html"

_env = Environment(
    loader=FileSystemLoader(str(TEMPLATES_DIR)),
    autoescape=select_autoescape(["html"]),
    trim_blocks=True,
    lstrip_blocks=True,
)


def _money(value: Optional[float]) -> str:
    if value is None:
        return "-"
    return f"{value:,.2f}"


_env.filters["money"] = _money


class ReportService:
    """Aggregates product data for the dashboard and the exported report."""

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or default_settings

    def summary(self, products: Sequence[ProductRead]) -> InventorySummary:
        threshold = self.settings.low_stock_threshold
        total_value = sum(p.price * p.quantity for p in products)
        return InventorySummary(
            total_products=len(products),
            total_stock_value=round(total_value, 2),
            low_stock_count=sum(1 for p in products if p.quantity < threshold),
            low_stock_threshold=threshold,
        )

    def low_stock(self, products: Sequence[ProductRead]) -> List[ProductRead]:
        """Products below the threshold, fewest units first."""
        threshold = self.settings.low_stock_threshold
        return sorted((p for p in products if p.quantity < threshold), key=lambda p: p.quantity)

    def render_html(
        self,
        products: Sequence[ProductRead],
        summary: Optional[InventorySummary] = None,
        generated_at: Optional[datetime] = None,
    ) -> str:
        """Render the stock report as a complete HTML document."""
        if summary is None:
            summary = self.summary(products)
        generated_at = generated_at or datetime.now()
        template = _env.get_template("report.html")
        return template.render(
            title="Inventory Report",
            products=products,
            low_stock=self.low_stock(products),
            summary=summary,
            generated_date=generated_at.strftime("%Y-%m-%d"),
            generated_time=generated_at.strftime("%H:%M:%S"),
        )
