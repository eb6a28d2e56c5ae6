"""Domain service: financial analytics.

Pure reductions over orders, expenses and products.  Nothing is cached;
callers pass in one snapshot of each collection and every figure is
derived from that same snapshot.

Only orders whose payment has been *verified* count as revenue.  Expense
amounts are signed (income is negative) so ``total_expenses`` is already
net of manually recorded income.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import date, timedelta

from storefront.domain.model.expense import Expense
from storefront.domain.model.order import Order, PaymentStatus
from storefront.domain.model.product import Product


@dataclass(frozen=True)
class DailyRevenue:
    day: date
    revenue: int
    order_count: int


def verified_orders(orders: Iterable[Order]) -> list[Order]:
    return [o for o in orders if o.payment_status == PaymentStatus.VERIFIED]


def total_revenue(orders: Iterable[Order]) -> int:
    return sum(o.total_price.amount for o in verified_orders(orders))


def product_costs(orders: Iterable[Order], products: Mapping[str, Product]) -> int:
    """Cost of goods sold for verified orders.

    A line whose product has since been removed from the catalog
    contributes nothing.
    """
    cost = 0
    for order in verified_orders(orders):
        for item in order.items:
            product = products.get(item.product_id)
            if product is None:
                continue
            cost += product.cost_price.amount * item.quantity.value
    return cost


def total_expenses(expenses: Iterable[Expense]) -> int:
    return sum(e.amount for e in expenses)


def net_profit(
    orders: Iterable[Order],
    expenses: Iterable[Expense],
    products: Mapping[str, Product],
) -> int:
    orders = list(orders)
    return (
        total_revenue(orders)
        - total_expenses(expenses)
        - product_costs(orders, products)
    )


def daily_revenue(orders: Iterable[Order], today: date, days: int = 7) -> list[DailyRevenue]:
    """Revenue of verified orders per calendar day, oldest day first.

    Covers the *days* days ending with *today* (inclusive).  Order dates
    are taken from ``created_at`` in UTC.
    """
    if days <= 0:
        return []
    buckets: dict[date, list[Order]] = {
        today - timedelta(days=offset): [] for offset in range(days - 1, -1, -1)
    }
    for order in verified_orders(orders):
        day = order.created_at.date()
        if day in buckets:
            buckets[day].append(order)
    return [
        DailyRevenue(
            day=day,
            revenue=sum(o.total_price.amount for o in day_orders),
            order_count=len(day_orders),
        )
        for day, day_orders in sorted(buckets.items())
    ]


def category_distribution(products: Iterable[Product]) -> dict[str, int]:
    """Number of products per category, most populous first."""
    counts = Counter(p.category for p in products)
    return dict(counts.most_common())


def payment_status_counts(orders: Iterable[Order]) -> dict[str, int]:
    counts = {status.value: 0 for status in PaymentStatus}
    for order in orders:
        counts[order.payment_status.value] += 1
    return counts
