"""
Top‑level router for version 1 of the API.

This router aggregates domain‑specific routers (products, dashboard,
reports) under a unified prefix.  When new endpoints are added, update
this file to include their routers.
"""

from fastapi import APIRouter

from .endpoints import dashboard, products, reports

router = APIRouter()

router.include_router(products.router, prefix="/products", tags=["products"])
router.include_router(dashboard.router, prefix="/dashboard", tags=["dashboard"])
router.include_router(reports.router, prefix="/reports", tags=["reports"])
