"""
cart.py - Cart Aggregator

PURPOSE:
    Owns the product -> quantity mapping for the current sale and derives the
    running total from it. It is the only writer of cart state: the submission
    controller reads snapshots and asks for a clear, the display only reads.

DATA LAYOUT:
    Lines live in an explicit ordered map (a list of entries plus an index by
    product id), so lines are shown first-added-first-shown.

    add(1), add(2), add(1) ->
        entries: [CartLine(Burger, 2), CartLine(Fries, 1)]
        index:   {1: 0, 2: 1}
        total:   Decimal("12.50")

REVISIONS:
    Every mutation bumps ``revision``. A snapshot records the revision it was
    taken at, which lets clear() tell whether lines were added while a
    submission was in flight.
"""

import logging
from dataclasses import dataclass, replace
from decimal import Decimal
from typing import Callable, Dict, Iterator, List, Optional, Tuple

from pos_client.catalog import CatalogStore
from pos_client.schemas import Product
from shared.money import line_total, sum_money

logger = logging.getLogger(__name__)

CartListener = Callable[["Cart"], None]


@dataclass(frozen=True)
class CartLine:
    """A product and how many of it are in the cart."""

    product: Product
    quantity: int

    @property
    def product_id(self) -> int:
        return self.product.id

    @property
    def subtotal(self) -> Decimal:
        return line_total(self.product.price, self.quantity)


@dataclass(frozen=True)
class CartSnapshot:
    """Immutable ordered (product_id, quantity) pairs at a given revision."""

    items: Tuple[Tuple[int, int], ...]
    revision: int

    def __iter__(self) -> Iterator[Tuple[int, int]]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)


class OrderedLines:
    """Insertion-ordered map of product id -> CartLine."""

    def __init__(self):
        self._entries: List[CartLine] = []
        self._index: Dict[int, int] = {}

    def get(self, product_id: int) -> Optional[CartLine]:
        position = self._index.get(product_id)
        if position is None:
            return None
        return self._entries[position]

    def put(self, line: CartLine) -> None:
        """Insert a new line at the end, or replace an existing one in place."""
        position = self._index.get(line.product_id)
        if position is None:
            self._index[line.product_id] = len(self._entries)
            self._entries.append(line)
        else:
            self._entries[position] = line

    def remove(self, product_id: int) -> None:
        position = self._index.pop(product_id)
        del self._entries[position]
        # Entries after the removed one shift left by one
        for entry in self._entries[position:]:
            self._index[entry.product_id] -= 1

    def clear(self) -> None:
        self._entries.clear()
        self._index.clear()

    def __iter__(self) -> Iterator[CartLine]:
        return iter(list(self._entries))

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, product_id: object) -> bool:
        return product_id in self._index


class Cart:
    """Cart Aggregator: accumulates quantities and computes the total."""

    def __init__(self, catalog: CatalogStore):
        self.catalog = catalog
        self._lines = OrderedLines()
        self._listeners: List[CartListener] = []
        self.revision = 0

    def subscribe(self, listener: CartListener) -> None:
        """Register a callback run after every mutation (display refresh)."""
        self._listeners.append(listener)

    def _notify(self) -> None:
        for listener in self._listeners:
            listener(self)

    def add(self, product_id: int) -> CartLine:
        """Add one unit of a product. Raises UnknownProductError for unknown ids."""
        product = self.catalog.lookup(product_id)

        line = self._lines.get(product_id)
        if line is None:
            line = CartLine(product=product, quantity=1)
        else:
            line = replace(line, quantity=line.quantity + 1)
        self._lines.put(line)
        self.revision += 1

        logger.info(f"Added {product.name} to cart (quantity {line.quantity})")
        self._notify()
        return line

    def total(self) -> Decimal:
        """Sum of quantity x price over all lines, recomputed on every call."""
        return sum_money(line.subtotal for line in self._lines)

    def snapshot(self) -> CartSnapshot:
        return CartSnapshot(
            items=tuple((line.product_id, line.quantity) for line in self._lines),
            revision=self.revision,
        )

    def clear(self, submitted: Optional[CartSnapshot] = None) -> None:
        """Empty the cart after a confirmed submission.

        When ``submitted`` is given and lines were added after it was taken,
        only the submitted quantities are removed so the later adds survive.
        """
        if submitted is None or submitted.revision == self.revision:
            self._lines.clear()
            logger.info("Cart cleared")
        else:
            for product_id, quantity in submitted:
                line = self._lines.get(product_id)
                if line is None:
                    continue
                remaining = line.quantity - quantity
                if remaining > 0:
                    self._lines.put(replace(line, quantity=remaining))
                else:
                    self._lines.remove(product_id)
            logger.info(
                f"Cart settled against revision {submitted.revision}, "
                f"{len(self._lines)} lines added since remain"
            )
        self.revision += 1
        self._notify()

    def lines(self) -> Tuple[CartLine, ...]:
        return tuple(self._lines)

    def quantity_of(self, product_id: int) -> int:
        line = self._lines.get(product_id)
        return line.quantity if line else 0

    @property
    def is_empty(self) -> bool:
        return len(self._lines) == 0

    def __len__(self) -> int:
        return len(self._lines)
