"""
submission.py - Order Submission Controller

STATE MACHINE:
    IDLE --begin()--> SUBMITTING --resolve(ok)-----> SUCCEEDED --> IDLE
                                 --resolve(error)--> FAILED ----> IDLE

    begin() is rejected locally (no remote call, cart untouched) when the cart
    is empty or a submission is already in flight.

RECONCILIATION:
    - Success: the cart is cleared through the aggregator, settled against the
      snapshot the request was built from.
    - Rejection (non-success status): the backend's reason is shown, cart kept.
    - Transport failure or any unexpected error during the call: generic
      message, cart kept.

    There is no automatic retry. Submitting again rebuilds the request from
    whatever the cart holds at that moment.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional

from pos_client.api import PosApiClient
from pos_client.cart import Cart, CartSnapshot
from pos_client.errors import (
    EmptyCartError,
    OrderRejectedError,
    OrderTransportError,
    PosClientError,
    SubmissionInProgressError,
)
from pos_client.schemas import OrderItem, OrderRequest, SubmissionOutcome

logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "Order submitted successfully!"
GENERIC_FAILURE_MESSAGE = "An error occurred while submitting the order."


class SubmissionState(str, Enum):
    IDLE = "idle"
    SUBMITTING = "submitting"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class SubmissionStatus(str, Enum):
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    # Refused locally before any remote call
    REJECTED = "rejected"


@dataclass(frozen=True)
class SubmissionResult:
    """What the user is told about one submit action."""

    status: SubmissionStatus
    message: str
    order_id: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status is SubmissionStatus.SUCCEEDED


ResultListener = Callable[[SubmissionResult], None]


def build_order_request(cart: Cart) -> OrderRequest:
    """Snapshot the cart into a request; the total comes from cart state."""
    snapshot = cart.snapshot()
    return OrderRequest(
        items=tuple(OrderItem(product_id=pid, quantity=qty) for pid, qty in snapshot),
        total=cart.total(),
        revision=snapshot.revision,
    )


def snapshot_of(request: OrderRequest) -> CartSnapshot:
    return CartSnapshot(
        items=tuple((item.product_id, item.quantity) for item in request.items),
        revision=request.revision,
    )


class SubmissionController:
    """Turns the cart into an order and reconciles the cart with the answer."""

    def __init__(self, cart: Cart, api: PosApiClient):
        self.cart = cart
        self.api = api
        self.state = SubmissionState.IDLE
        self.last_result: Optional[SubmissionResult] = None
        self._in_flight: Optional[OrderRequest] = None
        self._listeners: List[ResultListener] = []

    def subscribe(self, listener: ResultListener) -> None:
        self._listeners.append(listener)

    def begin(self) -> OrderRequest:
        """Move IDLE -> SUBMITTING and return a fresh request.

        Raises SubmissionInProgressError or EmptyCartError without touching
        the cart.
        """
        if self.state is SubmissionState.SUBMITTING:
            logger.warning("Submit ignored, another submission is in flight")
            raise SubmissionInProgressError()
        if self.cart.is_empty:
            logger.warning("Submit ignored, cart is empty")
            raise EmptyCartError()

        request = build_order_request(self.cart)
        self._in_flight = request
        self.state = SubmissionState.SUBMITTING
        logger.info(
            f"Submitting order with {len(request.items)} lines, total {request.total}",
            extra={"correlation_id": request.request_id},
        )
        return request

    async def send(self, request: OrderRequest) -> SubmissionOutcome:
        """Perform the remote call. Remote failures come back as outcomes."""
        try:
            receipt = await self.api.create_order(request)
        except OrderRejectedError as e:
            logger.error(
                f"Order rejected with HTTP {e.status_code}: {e.reason}",
                extra={"correlation_id": request.request_id},
            )
            return SubmissionOutcome.rejection(e.reason, e.status_code)
        except OrderTransportError as e:
            logger.error(
                f"Order request failed: {e.reason}",
                extra={"correlation_id": request.request_id},
            )
            return SubmissionOutcome.transport_failure(e.reason)
        except Exception as e:
            # The controller must always leave SUBMITTING
            logger.error(
                f"Order request could not be sent: {e!r}",
                exc_info=True,
                extra={"correlation_id": request.request_id},
            )
            return SubmissionOutcome.transport_failure(str(e) or e.__class__.__name__)
        return SubmissionOutcome.success(receipt)

    def resolve(self, request: OrderRequest, outcome: SubmissionOutcome) -> SubmissionResult:
        """Apply the outcome of ``request`` and return to IDLE."""
        if self._in_flight is None or request.request_id != self._in_flight.request_id:
            raise PosClientError(f"No submission in flight for request {request.request_id}")

        if outcome.ok:
            self.state = SubmissionState.SUCCEEDED
            self.cart.clear(snapshot_of(request))
            order_id = outcome.receipt.order_id if outcome.receipt else None
            message = SUCCESS_MESSAGE if not order_id else f"{SUCCESS_MESSAGE} ({order_id})"
            result = SubmissionResult(SubmissionStatus.SUCCEEDED, message, order_id)
            logger.info(
                f"Order {order_id or '(no id)'} accepted",
                extra={"correlation_id": request.request_id},
            )
        else:
            self.state = SubmissionState.FAILED
            if outcome.rejected and outcome.reason:
                message = f"Failed to submit order: {outcome.reason}"
            else:
                message = GENERIC_FAILURE_MESSAGE
            result = SubmissionResult(SubmissionStatus.FAILED, message)

        self.last_result = result
        self._in_flight = None
        self.state = SubmissionState.IDLE
        self._publish(result)
        return result

    def reject(self, error: PosClientError) -> SubmissionResult:
        """Report a local refusal from begin() to listeners."""
        result = SubmissionResult(SubmissionStatus.REJECTED, str(error))
        self.last_result = result
        self._publish(result)
        return result

    async def submit(self) -> SubmissionResult:
        """begin + send + resolve in one call."""
        try:
            request = self.begin()
        except (EmptyCartError, SubmissionInProgressError) as e:
            return self.reject(e)
        outcome = await self.send(request)
        return self.resolve(request, outcome)

    def _publish(self, result: SubmissionResult) -> None:
        for listener in self._listeners:
            listener(result)
