from decimal import Decimal
from typing import Any, Optional, Tuple
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, PositiveInt, field_serializer, field_validator

from shared.money import to_money


class Product(BaseModel):
    """Product as listed by GET /api/products."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: int
    name: str
    price: Decimal

    @field_validator("price", mode="before")
    @classmethod
    def _parse_price(cls, value: Any) -> Decimal:
        price = to_money(value)
        if price < 0:
            raise ValueError("price must be non-negative")
        return price


class OrderItem(BaseModel):
    """Order item schema."""

    model_config = ConfigDict(frozen=True)

    product_id: int
    quantity: PositiveInt


class OrderRequest(BaseModel):
    """Snapshot of the cart sent as POST /api/orders.

    ``revision`` is the cart revision the snapshot was taken at and
    ``request_id`` tags log lines for this attempt; neither goes on the wire.
    """

    model_config = ConfigDict(frozen=True)

    items: Tuple[OrderItem, ...]
    total: Decimal
    revision: int = Field(default=0, exclude=True)
    request_id: str = Field(default_factory=lambda: str(uuid4()), exclude=True)

    @field_serializer("total", when_used="json")
    def _total_as_number(self, total: Decimal) -> float:
        return float(total)

    def to_payload(self) -> dict:
        return self.model_dump(mode="json")


class OrderReceipt(BaseModel):
    """Success body of POST /api/orders. Only the order id is of interest.

    Fields are read leniently: the order was accepted once the status is 2xx,
    whatever shape the body has.
    """

    model_config = ConfigDict(extra="ignore")

    order_id: Optional[str] = None
    status: Optional[str] = None

    @field_validator("order_id", "status", mode="before")
    @classmethod
    def _as_text(cls, value: Any) -> Optional[str]:
        if value is None or isinstance(value, (dict, list)):
            return None
        return str(value)


class SubmissionOutcome(BaseModel):
    """How a remote order call resolved."""

    ok: bool
    receipt: Optional[OrderReceipt] = None
    reason: Optional[str] = None
    status_code: Optional[int] = None

    @property
    def rejected(self) -> bool:
        """True when the backend answered with an error status."""
        return not self.ok and self.status_code is not None

    @classmethod
    def success(cls, receipt: OrderReceipt) -> "SubmissionOutcome":
        return cls(ok=True, receipt=receipt)

    @classmethod
    def rejection(cls, reason: str, status_code: int) -> "SubmissionOutcome":
        return cls(ok=False, reason=reason, status_code=status_code)

    @classmethod
    def transport_failure(cls, reason: str) -> "SubmissionOutcome":
        return cls(ok=False, reason=reason)
