import logging
from decimal import Decimal
from typing import Dict, List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from pos_service.database import get_db
from pos_service.models import Order
from pos_service.repository import OrderRepository, ProductRepository, from_cents
from pos_service.schemas import (
    CreateOrderRequest,
    OrderItemSchema,
    OrderListResponse,
    OrderResponse,
    ProductSchema,
)
from shared.money import line_total, sum_money

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["pos"])


def check_order(request: CreateOrderRequest, prices: Dict[int, Decimal]) -> Decimal:
    """Validate an order against the catalog and return the expected total.

    Raises HTTPException(400) with a reason the client can show verbatim.
    """
    if not request.items:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Order has no items")

    for item in request.items:
        if item.product_id not in prices:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Invalid product: {item.product_id}",
            )
        if item.quantity <= 0:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Invalid quantity {item.quantity} for product {item.product_id}",
            )

    expected = sum_money(line_total(prices[item.product_id], item.quantity) for item in request.items)
    if expected != request.total:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Total mismatch: expected {expected}, got {request.total}",
        )
    return expected


def to_response(order: Order) -> OrderResponse:
    return OrderResponse(
        order_id=order.order_id,
        status=order.status,
        items=[OrderItemSchema(**item) for item in order.items],
        total=from_cents(order.total_cents),
        created_at=order.created_at,
    )


@router.get("/products", response_model=List[ProductSchema])
def get_products(db: Session = Depends(get_db)) -> List[ProductSchema]:
    """Get the list of available products."""
    repo = ProductRepository(db)
    return [
        ProductSchema(id=product.id, name=product.name, price=from_cents(product.price_cents))
        for product in repo.list_products()
    ]


@router.post("/orders", response_model=OrderResponse, status_code=status.HTTP_201_CREATED)
def create_order(request: CreateOrderRequest, db: Session = Depends(get_db)) -> OrderResponse:
    """Create a new order."""
    logger.info(f"Received new order: {len(request.items)} lines, total {request.total}")
    total = check_order(request, ProductRepository(db).prices_by_id())

    try:
        order = OrderRepository(db).create_order(
            items=[item.model_dump() for item in request.items],
            total=total,
        )
        db.commit()
        db.refresh(order)
    except Exception as e:
        db.rollback()
        logger.error(f"Error creating order: {e}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Could not store order") from e

    return to_response(order)


@router.get("/orders", response_model=OrderListResponse)
def list_orders(limit: int = 100, db: Session = Depends(get_db)) -> OrderListResponse:
    """List the most recent orders, newest first."""
    orders = OrderRepository(db).list_orders(limit)
    return OrderListResponse(orders=[to_response(order) for order in orders], total_orders=len(orders))


@router.get("/orders/{order_id}", response_model=OrderResponse)
def get_order(order_id: str, db: Session = Depends(get_db)) -> OrderResponse:
    """Get order details."""
    order = OrderRepository(db).get_order(order_id)
    if not order:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Order {order_id} not found")
    return to_response(order)
