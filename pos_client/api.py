"""
api.py - HTTP adapter for the POS backend

ENDPOINTS USED:
    GET  /api/products  - Ordered product list [{id, name, price}]
    POST /api/orders    - Create an order from {items: [{product_id, quantity}], total}

ERROR MAPPING:
    - Transport errors, non-success status or an unparseable body on the
      product list -> CatalogLoadError
    - Non-success status on order creation -> OrderRejectedError, carrying the
      reason from the error payload when one is present
    - Transport errors on order creation -> OrderTransportError
    - Any 2xx on order creation is an accepted order, even when its body
      cannot be read (the receipt then carries no order id)

The adapter owns no state besides the injected httpx.AsyncClient, so tests can
hand it a client backed by httpx.MockTransport or httpx.ASGITransport.
"""

import json
import logging
from typing import List

import httpx
from pydantic import TypeAdapter, ValidationError

from pos_client.errors import CatalogLoadError, OrderRejectedError, OrderTransportError
from pos_client.schemas import OrderReceipt, OrderRequest, Product

logger = logging.getLogger(__name__)

PRODUCTS_PATH = "/api/products"
ORDERS_PATH = "/api/orders"

_product_list = TypeAdapter(List[Product])


def error_reason(response: httpx.Response) -> str:
    """Pull a human readable reason out of an error response."""
    try:
        payload = response.json()
    except ValueError:
        text = response.text.strip()
        return text or f"HTTP {response.status_code}"

    if isinstance(payload, dict):
        for key in ("detail", "error", "message"):
            value = payload.get(key)
            if isinstance(value, str) and value:
                return value
            if value:
                # FastAPI validation errors come back as a list of dicts
                return json.dumps(value)
    return json.dumps(payload)


class PosApiClient:
    """Client for the product and order endpoints."""

    def __init__(self, http: httpx.AsyncClient):
        self.http = http

    async def fetch_products(self) -> List[Product]:
        """Fetch the full product list."""
        try:
            response = await self.http.get(PRODUCTS_PATH)
        except httpx.HTTPError as e:
            raise CatalogLoadError(str(e) or e.__class__.__name__) from e

        if not response.is_success:
            raise CatalogLoadError(f"HTTP {response.status_code}: {error_reason(response)}")

        try:
            products = _product_list.validate_json(response.content)
        except ValidationError as e:
            raise CatalogLoadError(f"malformed product list ({e.error_count()} errors)") from e

        logger.info(f"Fetched {len(products)} products")
        return products

    async def create_order(self, request: OrderRequest) -> OrderReceipt:
        """Submit an order and return the parsed success body."""
        try:
            response = await self.http.post(ORDERS_PATH, json=request.to_payload())
        except httpx.HTTPError as e:
            raise OrderTransportError(str(e) or e.__class__.__name__) from e

        if not response.is_success:
            raise OrderRejectedError(error_reason(response), response.status_code)

        if not response.content:
            return OrderReceipt()
        try:
            return OrderReceipt.model_validate_json(response.content)
        except ValidationError as e:
            # Accepted all the same; the order id is informational only
            logger.warning(
                f"Order accepted with HTTP {response.status_code} but the body could not be read "
                f"({e.error_count()} errors)"
            )
            return OrderReceipt()

    async def close(self) -> None:
        await self.http.aclose()
