"""
Main entrypoint for the Inventory API.

This module assembles the FastAPI application, sets up logging, the
product store and the error handlers, and includes the routers.  The
``create_app`` function builds and configures the app, which is then
instantiated at module import time as ``app``, e.g.::

    uvicorn inventory_api.app.main:app --reload

The product resource is served under ``/records`` and, as part of the
versioned API, under ``/api/v1/products``.
"""

from typing import Optional

from fastapi import FastAPI

from .core.config import Settings, settings as default_settings
from .core.errors import register_exception_handlers
from .core.logging_config import setup_logging
from .core.store import ProductStore
from .api.v1.router import router as v1_router
from .api.v1.endpoints import products


def create_app(settings: Optional[Settings] = None, store: Optional[ProductStore] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    settings : Optional[Settings]
        Configuration to use; defaults to the environment-derived
        ``settings`` instance.
    store : Optional[ProductStore]
        Product store to serve.  When omitted a store is created for
        ``settings.data_file``.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    settings = settings or default_settings
    # Initialise logging before anything else so that startup messages
    # are formatted consistently.
    setup_logging(settings.log_level, settings.log_file or None)

    app = FastAPI(title=settings.project_name, version=settings.api_version, debug=settings.debug)
    app.state.settings = settings
    app.state.store = store or ProductStore(settings.data_file)

    register_exception_handlers(app)

    app.include_router(products.router, prefix="/records", tags=["records"])
    app.include_router(v1_router, prefix="/api/v1")

    @app.get("/health", tags=["health"])
    async def health() -> dict:
        return {"status": "ok"}

    @app.on_event("startup")
    async def startup_event() -> None:
        # Create an empty data file on first start so the location is
        # visible to operators before the first product is added.
        app.state.store.ensure_exists()

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
