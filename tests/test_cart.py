"""Tests for the cart aggregator."""

from decimal import Decimal

import pytest

from pos_client.cart import CartLine, OrderedLines
from pos_client.errors import UnknownProductError


class TestCartAdd:
    def test_add_to_empty_cart_creates_line(self, cart):
        line = cart.add(1)

        assert line.quantity == 1
        assert line.product.name == "Burger"
        assert len(cart) == 1

    def test_add_same_product_twice_keeps_one_line(self, cart):
        cart.add(1)
        cart.add(1)

        assert len(cart) == 1
        assert cart.quantity_of(1) == 2

    def test_add_many_times_has_no_upper_bound(self, cart):
        for _ in range(500):
            cart.add(2)

        assert cart.quantity_of(2) == 500
        assert cart.total() == Decimal("1250.00")

    def test_lines_are_first_added_first_shown(self, cart):
        cart.add(2)
        cart.add(1)
        cart.add(2)
        cart.add(3)

        assert [line.product_id for line in cart.lines()] == [2, 1, 3]

    def test_unknown_product_raises_and_leaves_cart_unchanged(self, cart):
        cart.add(1)
        revision = cart.revision

        with pytest.raises(UnknownProductError) as exc_info:
            cart.add(99)

        assert exc_info.value.product_id == 99
        assert cart.snapshot().items == ((1, 1),)
        assert cart.revision == revision

    def test_add_notifies_listeners(self, cart):
        seen = []
        cart.subscribe(lambda c: seen.append(c.total()))

        cart.add(1)
        cart.add(2)

        assert seen == [Decimal("5.00"), Decimal("7.50")]


class TestCartTotal:
    def test_empty_cart_total_is_exactly_zero(self, cart):
        total = cart.total()

        assert total == Decimal("0")
        assert str(total) == "0.00"

    def test_low_value_item_does_not_drift(self, cart):
        for _ in range(3):
            cart.add(3)

        assert cart.total() == Decimal("0.30")

    def test_burger_and_fries_scenario(self, cart):
        cart.add(1)
        cart.add(2)
        cart.add(1)

        assert cart.snapshot().items == ((1, 2), (2, 1))
        assert cart.total() == Decimal("12.50")

    def test_total_is_recomputed_each_call(self, cart):
        cart.add(1)
        first = cart.total()
        cart.add(1)

        assert first == Decimal("5.00")
        assert cart.total() == Decimal("10.00")


class TestCartSnapshotAndClear:
    def test_snapshot_is_detached_from_later_adds(self, cart):
        cart.add(1)
        snapshot = cart.snapshot()
        cart.add(1)
        cart.add(2)

        assert list(snapshot) == [(1, 1)]
        assert len(snapshot) == 1

    def test_snapshot_then_clear_empties_cart(self, cart):
        cart.add(1)
        cart.add(2)
        snapshot = cart.snapshot()

        cart.clear(snapshot)

        assert cart.is_empty
        assert cart.lines() == ()
        assert cart.total() == Decimal("0.00")

    def test_clear_without_snapshot_empties_cart(self, cart):
        cart.add(3)
        cart.clear()

        assert len(cart) == 0

    def test_clear_keeps_adds_made_after_snapshot(self, cart):
        cart.add(1)
        cart.add(2)
        snapshot = cart.snapshot()
        # Arrive while the order is in flight
        cart.add(1)
        cart.add(3)

        cart.clear(snapshot)

        assert cart.snapshot().items == ((1, 1), (3, 1))
        assert cart.total() == Decimal("5.10")

    def test_clear_notifies_listeners(self, cart):
        cart.add(1)
        seen = []
        cart.subscribe(lambda c: seen.append(len(c)))

        cart.clear()

        assert seen == [0]

    def test_clear_bumps_revision(self, cart):
        cart.add(1)
        snapshot = cart.snapshot()
        cart.clear(snapshot)

        assert cart.revision == snapshot.revision + 1


class TestOrderedLines:
    def _line(self, catalog, product_id, quantity=1):
        return CartLine(product=catalog.lookup(product_id), quantity=quantity)

    def test_put_replaces_in_place(self, catalog):
        lines = OrderedLines()
        lines.put(self._line(catalog, 1))
        lines.put(self._line(catalog, 2))
        lines.put(self._line(catalog, 1, quantity=4))

        assert [(line.product_id, line.quantity) for line in lines] == [(1, 4), (2, 1)]

    def test_remove_reindexes_following_entries(self, catalog):
        lines = OrderedLines()
        for product_id in (1, 2, 3):
            lines.put(self._line(catalog, product_id))

        lines.remove(1)
        lines.put(self._line(catalog, 3, quantity=2))

        assert 1 not in lines
        assert lines.get(3).quantity == 2
        assert [line.product_id for line in lines] == [2, 3]

    def test_line_subtotal(self, catalog):
        assert self._line(catalog, 3, quantity=7).subtotal == Decimal("0.70")
