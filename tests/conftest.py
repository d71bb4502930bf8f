"""Pytest fixtures for POS tests."""

import asyncio
import io
import json
from typing import List, Optional

import httpx
import pytest

from pos_client.api import PosApiClient
from pos_client.cart import Cart
from pos_client.catalog import CatalogStore
from pos_client.config import ClientSettings
from pos_client.session import build_session
from pos_client.submission import SubmissionController

BASE_URL = "http://pos.test"

PRODUCTS = [
    {"id": 1, "name": "Burger", "price": 5.00},
    {"id": 2, "name": "Fries", "price": 2.50},
    {"id": 3, "name": "Candy", "price": 0.10},
]


class FakeBackend:
    """In-process stand-in for the POS backend behind httpx.MockTransport."""

    def __init__(self, products: list):
        self.products = products
        self.products_status = 200
        self.products_body: Optional[bytes] = None
        self.order_status = 201
        self.order_body: object = {"order_id": "ORD-TEST00000001", "status": "CREATED"}
        self.order_error: Optional[Exception] = None
        self.order_gate: Optional[asyncio.Event] = None
        self.order_payloads: List[dict] = []
        self.product_calls = 0

    async def handler(self, request: httpx.Request) -> httpx.Response:
        if request.url.path == "/api/products" and request.method == "GET":
            self.product_calls += 1
            if self.products_body is not None:
                return httpx.Response(self.products_status, content=self.products_body)
            return httpx.Response(self.products_status, json=self.products)

        if request.url.path == "/api/orders" and request.method == "POST":
            self.order_payloads.append(json.loads(request.content))
            if self.order_gate is not None:
                await self.order_gate.wait()
            if self.order_error is not None:
                raise self.order_error
            if isinstance(self.order_body, (bytes, str)):
                return httpx.Response(self.order_status, content=self.order_body)
            return httpx.Response(self.order_status, json=self.order_body)

        return httpx.Response(404, json={"detail": "Not Found"})


@pytest.fixture
def backend():
    return FakeBackend([dict(p) for p in PRODUCTS])


@pytest.fixture
def http(backend):
    return httpx.AsyncClient(transport=httpx.MockTransport(backend.handler), base_url=BASE_URL)


@pytest.fixture
def api(http):
    return PosApiClient(http)


@pytest.fixture
def catalog(api):
    """Catalog loaded from the fake backend."""
    store = CatalogStore(api)
    assert asyncio.run(store.load())
    return store


@pytest.fixture
def cart(catalog):
    return Cart(catalog)


@pytest.fixture
def controller(cart, api):
    return SubmissionController(cart, api)


@pytest.fixture
def make_session(http):
    """Factory for a wired session writing to a StringIO.

    Call it inside the coroutine that drives the session so the event queue
    belongs to that loop.
    """

    def factory():
        out = io.StringIO()
        session = build_session(ClientSettings(api_url=BASE_URL), http=http, stream=out)
        return session, out

    return factory
