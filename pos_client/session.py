"""
session.py - Client Session

PURPOSE:
    The one state object of a running POS client. It is built at startup and
    owns every collaborator, so there is no module-level mutable state:

        PosSession
          ├── api         PosApiClient (httpx.AsyncClient)
          ├── catalog     CatalogStore
          ├── cart        Cart (subscribed to by the display)
          ├── controller  SubmissionController
          ├── display     ConsoleDisplay
          └── dispatcher  EventDispatcher

EVENT FLOW:
    select(id) ──> product.selected ──────> cart.add(id) ──> display refresh
    submit()   ──> order.submit_requested ─> controller.begin() ─┐
                                                                 │ spawn
    submission.resolved <── controller.send(request) <───────────┘
          └──> controller.resolve(request, outcome) ──> cart cleared / kept
"""

import logging
from dataclasses import dataclass
from typing import Optional, TextIO

import httpx

from pos_client.api import PosApiClient
from pos_client.cart import Cart
from pos_client.catalog import CatalogStore
from pos_client.config import ClientSettings
from pos_client.dispatcher import EventDispatcher
from pos_client.display import ConsoleDisplay
from pos_client.errors import EmptyCartError, SubmissionInProgressError
from pos_client.events import (
    ProductSelectedEvent,
    QuitRequestedEvent,
    SubmissionResolvedEvent,
    SubmitRequestedEvent,
)
from pos_client.schemas import OrderRequest
from pos_client.submission import SubmissionController

logger = logging.getLogger(__name__)


@dataclass
class PosSession:
    api: PosApiClient
    catalog: CatalogStore
    cart: Cart
    controller: SubmissionController
    display: ConsoleDisplay
    dispatcher: EventDispatcher

    def wire(self) -> None:
        """Connect notifications and event handlers."""
        self.cart.subscribe(self.display.render_cart)
        self.controller.subscribe(self.display.show_result)
        self.dispatcher.on_error = self.display.show_error
        self.dispatcher.register("product.selected", self._on_product_selected)
        self.dispatcher.register("order.submit_requested", self._on_submit_requested)
        self.dispatcher.register("submission.resolved", self._on_submission_resolved)

    async def start(self) -> bool:
        """Load the catalog once and show it. Returns False if loading failed."""
        loaded = await self.catalog.load()
        self.display.render_catalog(self.catalog)
        return loaded

    # User actions, queued for the dispatcher

    def select(self, product_id: int) -> None:
        self.dispatcher.post(ProductSelectedEvent(product_id=product_id))

    def submit(self) -> None:
        self.dispatcher.post(SubmitRequestedEvent())

    def quit(self) -> None:
        self.dispatcher.post(QuitRequestedEvent())

    # Handlers

    def _on_product_selected(self, event: ProductSelectedEvent) -> None:
        self.cart.add(event.product_id)

    def _on_submit_requested(self, event: SubmitRequestedEvent) -> None:
        try:
            request = self.controller.begin()
        except (EmptyCartError, SubmissionInProgressError) as e:
            self.controller.reject(e)
            return
        self.dispatcher.spawn(self._send(request))

    async def _send(self, request: OrderRequest) -> None:
        outcome = await self.controller.send(request)
        self.dispatcher.post(SubmissionResolvedEvent(request=request, outcome=outcome))

    def _on_submission_resolved(self, event: SubmissionResolvedEvent) -> None:
        self.controller.resolve(event.request, event.outcome)

    async def run(self) -> None:
        await self.dispatcher.run()

    async def close(self) -> None:
        await self.dispatcher.shutdown()
        await self.api.close()


def build_session(
    settings: ClientSettings,
    http: Optional[httpx.AsyncClient] = None,
    stream: Optional[TextIO] = None,
) -> PosSession:
    """Construct and wire a session. ``http`` overrides the default client."""
    if http is None:
        http = httpx.AsyncClient(base_url=settings.api_url, timeout=settings.request_timeout)
    api = PosApiClient(http)
    catalog = CatalogStore(api)
    cart = Cart(catalog)
    session = PosSession(
        api=api,
        catalog=catalog,
        cart=cart,
        controller=SubmissionController(cart, api),
        display=ConsoleDisplay(stream),
        dispatcher=EventDispatcher(),
    )
    session.wire()
    logger.info(f"Session created for {settings.api_url}")
    return session
