"""
Service layer for products.

``ProductService`` validates incoming product data and delegates the
actual persistence to a :class:`ProductStore`.  It converts stored
records into :class:`ProductRead` models and signals failures with the
exceptions from ``core.errors`` so the HTTP layer can map them to
status codes.

The service is constructed around an injected store rather than
reaching for a global one, so tests and alternative entry points can
point it at any data file.
"""

from __future__ import annotations

import logging
from typing import Any, List, Mapping, Union

import pydantic
from fastapi import Depends, Request

from ..core.config import Settings, settings as default_settings
from ..core.errors import NotFoundError, StorageError, ValidationError, describe_validation_errors
from ..core.store import ProductStore, Record, get_store
from ..schemas.product import ProductInput, ProductRead


logger = logging.getLogger(__name__)

ProductData = Union[ProductInput, Mapping[str, Any]]


class ProductService:
    """Сервис для управления товарами (CRUD поверх JSON-хранилища)."""

    def __init__(self, store: ProductStore, settings: Settings | None = None) -> None:
        self.store = store
        self.settings = settings or default_settings

    async def list_products(self) -> List[ProductRead]:
        """Return every product in storage order.

        If the data file cannot be read the error is logged and an empty
        list is returned; a stored record that no longer validates is
        logged and left out of the result.  With ``strict_reads`` enabled
        both cases raise :class:`StorageError` instead.
        """
        try:
            records = self.store.list_all()
        except StorageError:
            if self.settings.strict_reads:
                raise
            logger.warning("Product data unreadable, returning an empty list")
            return []
        products = []
        for record in records:
            try:
                products.append(self._to_read(record))
            except StorageError:
                if self.settings.strict_reads:
                    raise
                logger.warning("Skipping malformed product %r", record.get("id"))
        return products

    async def get_product(self, product_id: str) -> ProductRead:
        record = self.store.find_by_id(product_id)
        if record is None:
            raise NotFoundError("Product not found")
        return self._to_read(record)

    async def create_product(self, data: ProductData) -> ProductRead:
        """Validate ``data`` and append it as a new product."""
        product_in = self._validate(data)
        record = self.store.append(product_in.model_dump())
        return self._to_read(record)

    async def update_product(self, product_id: str, data: ProductData) -> ProductRead:
        """Replace the editable fields of ``product_id`` with ``data``.

        Optional fields missing from ``data`` are cleared.  Raises
        :class:`NotFoundError` when the product does not exist.
        """
        product_in = self._validate(data)
        record = self.store.replace(product_id, product_in.model_dump())
        if record is None:
            raise NotFoundError("Product not found")
        return self._to_read(record)

    async def delete_product(self, product_id: str) -> None:
        if not self.store.remove(product_id):
            raise NotFoundError("Product not found")

    @staticmethod
    def _validate(data: ProductData) -> ProductInput:
        if isinstance(data, ProductInput):
            return data
        if not isinstance(data, Mapping):
            raise ValidationError("Product data must be an object")
        missing = [field for field in ("name", "price", "quantity") if data.get(field) in (None, "")]
        if missing:
            raise ValidationError(
                "Incomplete data: name, price and quantity are required (missing: %s)" % ", ".join(missing)
            )
        try:
            return ProductInput.model_validate(data)
        except pydantic.ValidationError as exc:
            raise ValidationError(describe_validation_errors(exc.errors())) from exc

    @staticmethod
    def _to_read(record: Record) -> ProductRead:
        try:
            return ProductRead.model_validate(record)
        except pydantic.ValidationError as exc:
            logger.error("Stored product %s is malformed: %s", record.get("id"), exc)
            raise StorageError("Stored product %s is malformed" % record.get("id")) from exc


def get_product_service(request: Request, store: ProductStore = Depends(get_store)) -> ProductService:
    """FastAPI dependency building a service around the application store."""
    return ProductService(store, request.app.state.settings)
