"""
events.py - Client Event Definitions

PURPOSE:
    Events posted to the session's event queue. User actions and completed
    remote calls both arrive as events, and the dispatcher handles them one at
    a time in the order they were posted.

EVENT TYPES:
    - product.selected: user picked a product to add to the cart
    - order.submit_requested: user pressed submit
    - submission.resolved: the remote order call for a request finished
    - session.quit_requested: user asked to leave

COMMON FIELDS (BaseEvent):
    - event_id: Unique identifier (UUID)
    - event_type: Event category and action
    - timestamp: UTC timestamp of event creation
"""

from datetime import datetime, timezone
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field

from pos_client.schemas import OrderRequest, SubmissionOutcome


class BaseEvent(BaseModel):
    """Base model for all queue events."""

    model_config = ConfigDict(frozen=True)

    event_id: str = Field(default_factory=lambda: str(uuid4()))
    event_type: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class ProductSelectedEvent(BaseEvent):
    event_type: str = "product.selected"
    product_id: int


class SubmitRequestedEvent(BaseEvent):
    event_type: str = "order.submit_requested"


class SubmissionResolvedEvent(BaseEvent):
    """Posted by the submission task once the remote call has an answer."""

    event_type: str = "submission.resolved"
    request: OrderRequest
    outcome: SubmissionOutcome


class QuitRequestedEvent(BaseEvent):
    event_type: str = "session.quit_requested"

