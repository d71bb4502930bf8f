"""
pos_service/main.py - POS Backend Service

PURPOSE:
    Reference backend for the POS client. Serves the product list and accepts
    orders built from a client's cart.

API ENDPOINTS:
    GET    /api/products            - List products [{id, name, price}]
    POST   /api/orders              - Create order {items: [{product_id, quantity}], total}
    GET    /api/orders              - List recent orders
    GET    /api/orders/{order_id}   - Get order details
    GET    /health                  - Health check endpoint

ORDER VALIDATION:
    Orders are rejected with HTTP 400 and a {"detail": <reason>} body when they
    have no items, reference an unknown product, carry a non-positive quantity,
    or state a total that does not match the catalog prices. Malformed bodies
    get FastAPI's 422.

DATA STORAGE:
    - SQLAlchemy tables: products, orders (prices and totals in integer cents)
    - SQLite file by default, any SQLAlchemy URL via POS_SERVICE_DATABASE_URL

TESTING COMMANDS:
    1. Health Check:
        curl -X GET http://localhost:3000/health

    2. List Products:
        curl -X GET http://localhost:3000/api/products

    3. Create Order (2 Classic Burgers and 1 Fries):
        curl -X POST http://localhost:3000/api/orders \
          -H "Content-Type: application/json" \
          -d '{"items": [{"product_id": 1, "quantity": 2}, {"product_id": 3, "quantity": 1}], "total": 37.00}'

USAGE:
    pos-service            # or: python -m pos_service
    Runs on port 3000 by default
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from pos_service import __version__
from pos_service.config import ServiceSettings
from pos_service.database import init_db, make_engine, make_session_factory
from pos_service.routes import router
from pos_service.schemas import HealthResponse
from pos_service.seed_data import seed_products
from shared.logging_config import setup_logging

logger = logging.getLogger(__name__)

SERVICE_NAME = "pos-service"


def create_app(settings: Optional[ServiceSettings] = None) -> FastAPI:
    """Build the FastAPI app with its own engine and session factory."""
    settings = settings or ServiceSettings()
    engine = make_engine(settings.database_url)
    session_factory = make_session_factory(engine)

    # Creates a context manager with two phases:
    # 1. Initialization phase (before yield): create tables and seed the menu
    # 2. Cleanup phase (after yield): dispose of the connection pool
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Manage app lifecycle."""
        logger.info("Starting POS Service...")

        try:
            init_db(engine)
        except Exception as e:
            logger.error(f"Failed to initialize database: {e}")
            raise

        if settings.seed_products:
            db = session_factory()
            try:
                seed_products(db)
            except Exception as e:
                logger.error(f"Failed to seed products: {e}")
            finally:
                db.close()

        yield

        logger.info("Shutting down POS Service...")
        engine.dispose()

    app = FastAPI(title="POS Service", version=__version__, lifespan=lifespan)
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = session_factory

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.include_router(router)

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        """Health check endpoint."""
        return HealthResponse(status="ok", service=SERVICE_NAME, version=__version__)

    return app


def main(settings: Optional[ServiceSettings] = None) -> None:
    import uvicorn

    settings = settings or ServiceSettings()
    setup_logging(SERVICE_NAME, level=settings.log_level, tz_name=settings.log_timezone)
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
