import logging
from decimal import Decimal
from typing import Dict, List, Optional
from uuid import uuid4

from sqlalchemy.orm import Session

from pos_service.models import Order, Product
from shared.money import to_money

logger = logging.getLogger(__name__)


def to_cents(amount: Decimal) -> int:
    return int(to_money(amount) * 100)


def from_cents(cents: int) -> Decimal:
    return to_money(Decimal(cents) / 100)


class ProductRepository:
    """Repository for product operations."""

    def __init__(self, db: Session):
        """Initialize with database session."""
        self.db = db

    def create_product(self, product_id: int, name: str, price: Decimal) -> Product:
        product = Product(id=product_id, name=name, price_cents=to_cents(price))
        self.db.add(product)
        self.db.flush()
        logger.info(f"Created product {product_id}: {name} at {to_money(price)}")
        return product

    def get_product(self, product_id: int) -> Optional[Product]:
        return self.db.query(Product).filter(Product.id == product_id).first()

    def list_products(self) -> List[Product]:
        return self.db.query(Product).order_by(Product.id).all()

    def prices_by_id(self) -> Dict[int, Decimal]:
        return {product.id: from_cents(product.price_cents) for product in self.list_products()}

    def count(self) -> int:
        return self.db.query(Product).count()


class OrderRepository:
    """Repository for order operations."""

    def __init__(self, db: Session):
        """Initialize with database session."""
        self.db = db

    def create_order(self, items: list, total: Decimal) -> Order:
        """Create a new order."""
        order_id = f"ORD-{uuid4().hex[:12].upper()}"
        order = Order(
            order_id=order_id,
            items=items,
            total_cents=to_cents(total),
            status="CREATED",
        )
        self.db.add(order)
        self.db.flush()
        logger.info(f"Created order {order_id} with {len(items)} lines, total {to_money(total)}")
        return order

    def get_order(self, order_id: str) -> Optional[Order]:
        """Get order by order_id."""
        return self.db.query(Order).filter(Order.order_id == order_id).first()

    def list_orders(self, limit: int = 100) -> List[Order]:
        return self.db.query(Order).order_by(Order.id.desc()).limit(limit).all()
