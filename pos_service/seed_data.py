import logging
from decimal import Decimal

from sqlalchemy.orm import Session

from pos_service.repository import ProductRepository

logger = logging.getLogger(__name__)

# Menu the service starts with: (id, name, price)
INITIAL_PRODUCTS = [
    (1, "Classic Burger", Decimal("15.50")),
    (2, "Cheese Burger", Decimal("17.50")),
    (3, "Fries", Decimal("6.00")),
    (4, "Soda", Decimal("4.50")),
]


def seed_products(db: Session) -> int:
    """Seed the product table with the initial menu. Returns how many were added."""
    logger.info("Seeding products...")
    repo = ProductRepository(db)
    added = 0

    for product_id, name, price in INITIAL_PRODUCTS:
        if repo.get_product(product_id):
            logger.info(f"Product {product_id} already exists, skipping")
            continue
        repo.create_product(product_id, name, price)
        added += 1

    db.commit()
    logger.info(f"Seeded {added} products")
    return added
