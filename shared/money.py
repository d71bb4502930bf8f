"""Decimal helpers for currency amounts.

Prices and totals are kept as ``Decimal`` quantized to cents so that repeated
additions of low-value items never drift the way binary floats do.
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Iterable, Union

CENTS = Decimal("0.01")
ZERO = Decimal("0.00")

MoneyLike = Union[Decimal, int, float, str]


def to_money(value: MoneyLike) -> Decimal:
    """Convert a price-like value to a cent-quantized Decimal.

    Floats go through ``str`` first so that ``0.1`` becomes ``Decimal("0.10")``
    and not its binary expansion.
    """
    if isinstance(value, float):
        value = repr(value)
    try:
        amount = Decimal(value)
    except (InvalidOperation, TypeError) as e:
        raise ValueError(f"Invalid money amount: {value!r}") from e
    if not amount.is_finite():
        raise ValueError(f"Invalid money amount: {value!r}")
    return amount.quantize(CENTS, rounding=ROUND_HALF_UP)


def line_total(price: Decimal, quantity: int) -> Decimal:
    return to_money(price * quantity)


def sum_money(amounts: Iterable[Decimal]) -> Decimal:
    """Sum amounts, returning exactly 0.00 for an empty iterable."""
    return to_money(sum(amounts, ZERO))


def format_money(amount: Decimal) -> str:
    """Two-decimal display form, e.g. ``12.50``."""
    return f"{to_money(amount):.2f}"
