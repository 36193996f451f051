"""Vegan Catalog API client.

This module defines a thin client wrapper around the catalog's REST
API.  It uses the ``requests`` library internally and exposes one
method per catalog operation:

* :meth:`CatalogApiClient.get_product` – fetch a product by identifier.
* :meth:`CatalogApiClient.add_product` – create a product.
* :meth:`CatalogApiClient.update_product` – replace a product's fields.
* :meth:`CatalogApiClient.delete_product` – delete a product.
* :meth:`CatalogApiClient.toggle_availability` – flip availability.

Every method returns a ``(data, error)`` tuple instead of raising.  On
success ``error`` is ``None``; on failure ``data`` is ``None`` and
``error`` is a dictionary with ``status_code`` and ``message`` keys.
A missing product therefore comes back as
``(None, {"status_code": 404, "message": "Product with ID 7 not found"})``.

The client supports optional authentication via an API key which will
be sent in the ``Authorization`` header, for deployments that put the
catalog behind a gateway.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Tuple

import requests


logger = logging.getLogger(__name__)

Result = Tuple[Optional[Dict[str, Any]], Optional[Dict[str, Any]]]

PRODUCTS_PATH = "/api/v1/products"


class CatalogApiClient:
    """Client for the catalog HTTP API."""

    def __init__(
        self,
        *,
        base_url: str,
        api_key: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL of the API, e.g. ``http://localhost:8000``.
            api_key: Optional API key sent as ``Bearer <api_key>``.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
            timeout: Per-request timeout in seconds.
        """
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helper
    # ------------------------------------------------------------------
    def _request(self, method: str, path: str, *, json_body: Any | None = None) -> Result:
        """Perform an HTTP request to the API.

        Args:
            method: HTTP method (``GET``, ``POST``, ``PUT``, ``PATCH``, ``DELETE``).
            path: Path relative to :attr:`base_url`.
            json_body: JSON body to send with the request.
        Returns:
            A tuple ``(data, error)`` as described in the module docstring.
        """
        url = f"{self.base_url}{path}"
        headers: Dict[str, str] = {}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                json=json_body,
                headers=headers,
                timeout=self.timeout,
            )
            response.raise_for_status()
            if response.content:
                return response.json(), None
            return None, None
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            message = ""
            if exc.response is not None:
                try:
                    err_json = exc.response.json()
                    message = err_json.get("detail") or err_json.get("message") or str(err_json)
                except ValueError:
                    message = exc.response.text
            if not isinstance(message, str):
                # FastAPI validation errors carry a list of problems.
                message = str(message)
            if not message:
                message = str(exc)
            logger.error("API request failed (%s): %s", status, message)
            return None, {"status_code": status, "message": message}
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}

    # ------------------------------------------------------------------
    # Product operations
    # ------------------------------------------------------------------
    def get_product(self, product_id: int) -> Result:
        """Retrieve a single product by ID."""
        return self._request("GET", f"{PRODUCTS_PATH}/{product_id}")

    def add_product(self, *, name: str, description: str, price: int, seller: str) -> Result:
        """Create a product and return the stored record."""
        payload = {"name": name, "description": description, "price": price, "seller": seller}
        return self._request("POST", f"{PRODUCTS_PATH}/", json_body=payload)

    def update_product(
        self, product_id: int, *, name: str, description: str, price: int, seller: str
    ) -> Result:
        """Replace the mutable fields of a product."""
        payload = {"name": name, "description": description, "price": price, "seller": seller}
        return self._request("PUT", f"{PRODUCTS_PATH}/{product_id}", json_body=payload)

    def delete_product(self, product_id: int) -> Result:
        """Delete a product; the last state is returned as ``data``."""
        return self._request("DELETE", f"{PRODUCTS_PATH}/{product_id}")

    def toggle_availability(self, product_id: int) -> Result:
        """Flip the availability flag of a product."""
        return self._request("PATCH", f"{PRODUCTS_PATH}/{product_id}/availability")
