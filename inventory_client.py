"""Inventory API client.

This module defines a small client wrapper around the Inventory API
REST endpoints.  It is the Python counterpart of the browser-side
``fetch`` helpers used by the web pages and is handy for scripts,
imports and smoke tests against a running server.  The client uses
the ``requests`` library internally to make HTTP calls.

The client exposes high‑level methods for each operation:

* :meth:`list_products` – return all products.
* :meth:`get_product` – fetch a single product by its identifier.
* :meth:`create_product` – create a product.
* :meth:`update_product` – replace the editable fields of a product.
* :meth:`delete_product` – delete a product.
* :meth:`get_summary` – dashboard figures (totals and low stock).
* :meth:`download_report` – the HTML stock report.

Every method returns a tuple ``(data, error)``.  On success ``error``
is ``None``; on failure ``data`` is empty and ``error`` is a dictionary
with keys ``status_code`` and ``message``.  The message is taken from
the ``error`` field of the server's JSON body when available.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

import requests


logger = logging.getLogger(__name__)

ApiError = Dict[str, Any]


class InventoryAPI:
    """Client for interacting with the Inventory API."""

    def __init__(
        self,
        *,
        base_url: str,
        prefix: str = "/records",
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL of the server, e.g. ``http://localhost:8000``.
            prefix: Path under which the product resource is mounted.
                ``/records`` by default; ``/api/v1/products`` also works.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
            timeout: Seconds to wait for each request.
        """
        self.base_url = base_url.rstrip("/")
        self.prefix = "/" + prefix.strip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    def _send(
        self, method: str, path: str, *, json_body: Any | None = None
    ) -> Tuple[Optional[requests.Response], Optional[ApiError]]:
        """Perform an HTTP request and return ``(response, error)``."""
        url = f"{self.base_url}{path}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                json=json_body,
                timeout=self.timeout,
            )
            response.raise_for_status()
            return response, None
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            message = ""
            if exc.response is not None:
                try:
                    err_json = exc.response.json()
                    message = err_json.get("error") or err_json.get("detail") or str(err_json)
                except ValueError:
                    message = exc.response.text
            if not message:
                message = str(exc)
            logger.error("API request failed (%s): %s", status, message)
            return None, {"status_code": status, "message": message}
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}

    def _request(
        self, method: str, path: str, *, json_body: Any | None = None
    ) -> Tuple[Optional[Any], Optional[ApiError]]:
        """Perform an HTTP request and decode the JSON body."""
        response, error = self._send(method, path, json_body=json_body)
        if error:
            return None, error
        if not response.content:
            return None, None
        try:
            return response.json(), None
        except ValueError:
            logger.error("Invalid JSON in response from %s", path)
            return None, {"status_code": response.status_code, "message": "Invalid JSON response"}

    def _product_path(self, product_id: Any) -> str:
        return f"{self.prefix}/{product_id}"

    # ------------------------------------------------------------------
    # Product operations
    # ------------------------------------------------------------------
    def list_products(self) -> Tuple[List[Dict[str, Any]], Optional[ApiError]]:
        data, error = self._request("GET", self.prefix)
        if error:
            return [], error
        if isinstance(data, list):
            return data, None
        return [], None

    def get_product(self, product_id: Any) -> Tuple[Optional[Dict[str, Any]], Optional[ApiError]]:
        return self._request("GET", self._product_path(product_id))

    def create_product(self, payload: Dict[str, Any]) -> Tuple[Optional[Dict[str, Any]], Optional[ApiError]]:
        """Create a product.

        Args:
            payload: ``name``, ``price`` and ``quantity`` are required;
                ``description``, ``sku``, ``category`` and ``supplier``
                are optional.
        """
        return self._request("POST", self.prefix, json_body=payload)

    def update_product(
        self, product_id: Any, payload: Dict[str, Any]
    ) -> Tuple[Optional[Dict[str, Any]], Optional[ApiError]]:
        """Replace a product.  Optional fields left out are cleared."""
        return self._request("PUT", self._product_path(product_id), json_body=payload)

    def delete_product(self, product_id: Any) -> Tuple[bool, Optional[ApiError]]:
        data, error = self._request("DELETE", self._product_path(product_id))
        if error:
            return False, error
        return bool(data and data.get("success")), None

    # ------------------------------------------------------------------
    # Dashboard and reports
    # ------------------------------------------------------------------
    def get_summary(self) -> Tuple[Optional[Dict[str, Any]], Optional[ApiError]]:
        return self._request("GET", "/api/v1/dashboard/summary")

    def download_report(self) -> Tuple[Optional[str], Optional[ApiError]]:
        """Return the HTML stock report as text."""
        response, error = self._send("GET", "/api/v1/reports/html")
        if error:
            return None, error
        return response.text, None
