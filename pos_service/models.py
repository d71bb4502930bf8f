from sqlalchemy import JSON, Column, DateTime, Integer, String, func
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class Product(Base):
    """Product model. Prices are stored in integer cents."""

    __tablename__ = "products"

    id = Column(Integer, primary_key=True, autoincrement=False)
    name = Column(String(255), nullable=False)
    price_cents = Column(Integer, nullable=False)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)


class Order(Base):
    """Order model."""

    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, autoincrement=True)
    order_id = Column(String(255), unique=True, nullable=False, index=True)
    status = Column(String(50), default="CREATED", nullable=False)
    items = Column(JSON, nullable=False)  # [{"product_id": 1, "quantity": 2}, ...]
    total_cents = Column(Integer, nullable=False)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)
