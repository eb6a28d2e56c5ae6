"""Pricing rules: line totals, cart totals and list-price discounts.

Pure functions over Money; no repositories involved.
"""

from __future__ import annotations

from collections.abc import Iterable
from decimal import ROUND_HALF_UP, Decimal

from storefront.domain.model.value_objects import Money


def line_total(unit_price: Money, quantity: int) -> Money:
    return unit_price * quantity


def cart_total(lines: Iterable[tuple[Money, int]]) -> Money:
    """Sum ``unit_price * quantity`` over ``(unit_price, quantity)`` pairs."""
    total = Money.zero()
    for unit_price, quantity in lines:
        total = total + line_total(unit_price, quantity)
    return total


def savings(price: Money, mrp: Money | None) -> Money:
    """How much cheaper the selling price is than the list price (MRP)."""
    if mrp is None or mrp <= price:
        return Money.zero()
    return mrp - price


def discount_percent(price: Money, mrp: Money | None) -> int:
    """Whole-percent discount off MRP, rounded half up; 0 without a discount."""
    saved = savings(price, mrp)
    if mrp is None or saved.amount == 0:
        return 0
    ratio = Decimal(saved.amount) * 100 / Decimal(mrp.amount)
    return int(ratio.quantize(Decimal("1"), rounding=ROUND_HALF_UP))
