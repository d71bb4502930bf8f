import sys
from typing import Optional, TextIO

from pos_client.cart import Cart
from pos_client.catalog import CatalogStore
from pos_client.errors import PosClientError
from pos_client.submission import SubmissionResult
from shared.money import format_money


class ConsoleDisplay:
    """Terminal rendering of the product list, the cart and user messages.

    Holds no state of its own; everything shown is read from the catalog and
    the cart at render time.
    """

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream or sys.stdout

    def _write(self, text: str = "") -> None:
        self.stream.write(text + "\n")
        self.stream.flush()

    def render_catalog(self, catalog: CatalogStore) -> None:
        if catalog.error:
            self._write(catalog.error)
            return
        self._write("Products:")
        for product in catalog.products:
            self._write(f"  [{product.id}] {product.name} - ${format_money(product.price)}")

    def render_cart(self, cart: Cart) -> None:
        self._write("Cart:")
        if cart.is_empty:
            self._write("  (empty)")
        for line in cart.lines():
            self._write(f"  {line.product.name} x {line.quantity}")
        self._write(f"Total: ${format_money(cart.total())}")

    def show_result(self, result: SubmissionResult) -> None:
        self._write(result.message)

    def show_error(self, error: PosClientError) -> None:
        self._write(f"Error: {error}")

    def show_message(self, text: str) -> None:
        self._write(text)
