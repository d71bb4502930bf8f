from datetime import datetime
from decimal import Decimal
from typing import Any, List

from pydantic import BaseModel, field_serializer, field_validator

from shared.money import to_money


class ProductSchema(BaseModel):
    """Product as listed by GET /api/products."""

    id: int
    name: str
    price: Decimal

    @field_serializer("price", when_used="json")
    def _price_as_number(self, price: Decimal) -> float:
        return float(price)


class OrderItemSchema(BaseModel):
    """Order item schema."""

    product_id: int
    quantity: int


class CreateOrderRequest(BaseModel):
    """Request to create an order."""

    items: List[OrderItemSchema]
    total: Decimal

    @field_validator("total", mode="before")
    @classmethod
    def _parse_total(cls, value: Any) -> Decimal:
        return to_money(value)


class OrderResponse(BaseModel):
    """Response model for order."""

    order_id: str
    status: str
    items: List[OrderItemSchema]
    total: Decimal
    created_at: datetime

    @field_serializer("total", when_used="json")
    def _total_as_number(self, total: Decimal) -> float:
        return float(total)


class OrderListResponse(BaseModel):
    orders: List[OrderResponse]
    total_orders: int


class HealthResponse(BaseModel):
    """Response model for health check."""

    status: str
    service: str
    version: str
