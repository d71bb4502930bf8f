"""Client session driven against the real service app, in process."""

import asyncio
import io
from decimal import Decimal

import httpx

from pos_client.config import ClientSettings
from pos_client.session import build_session
from pos_service.config import ServiceSettings
from pos_service.main import create_app
from pos_service.models import Product


def _run_against_service(steps):
    """Run ``steps(session, app)`` with a client wired to a fresh service app."""

    async def scenario():
        app = create_app(ServiceSettings(database_url="sqlite://"))
        async with app.router.lifespan_context(app):
            http = httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://testserver")
            out = io.StringIO()
            session = build_session(ClientSettings(api_url="http://testserver"), http=http, stream=out)
            try:
                await session.start()
                result = await steps(session, app)
            finally:
                await session.close()
            return result, out.getvalue()

    return asyncio.run(scenario())


def test_order_round_trip():
    async def steps(session, app):
        for product_id in (1, 3, 1):
            session.select(product_id)
        await session.dispatcher.drain()
        total = session.cart.total()
        session.submit()
        await session.dispatcher.drain()
        orders = (await session.api.http.get("/api/orders")).json()
        return total, session.cart.is_empty, orders

    (total, emptied, orders), output = _run_against_service(steps)

    assert total == Decimal("37.00")
    assert emptied
    assert orders["total_orders"] == 1
    assert orders["orders"][0]["items"] == [
        {"product_id": 1, "quantity": 2},
        {"product_id": 3, "quantity": 1},
    ]
    assert orders["orders"][0]["total"] == 37.0
    assert "[1] Classic Burger - $15.50" in output
    assert "Order submitted successfully! (ORD-" in output


def test_rejection_from_stale_catalog_keeps_cart():
    async def steps(session, app):
        # The menu changes after the client loaded it
        db = app.state.session_factory()
        try:
            db.query(Product).filter(Product.id == 3).delete()
            db.commit()
        finally:
            db.close()

        session.select(3)
        session.select(4)
        session.submit()
        await session.dispatcher.drain()
        return session.cart.snapshot().items, session.cart.total()

    (items, total), output = _run_against_service(steps)

    assert items == ((3, 1), (4, 1))
    assert total == Decimal("10.50")
    assert "Failed to submit order: Invalid product: 3" in output
