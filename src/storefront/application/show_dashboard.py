"""Application service: Admin Dashboard query.

Reads orders, expenses and products exactly once and derives every
figure from that one snapshot, so numbers on the dashboard always agree
with each other even while orders keep arriving.
"""

from __future__ import annotations

from datetime import date, datetime, timezone

from storefront.application.authorization import require_admin
from storefront.application.dto import DailyRevenueDTO, DashboardDTO
from storefront.domain.model.principal import Principal
from storefront.domain.repository.expense_repository import ExpenseRepository
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.service import analytics


class ShowDashboardHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        expense_repo: ExpenseRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._order_repo = order_repo
        self._expense_repo = expense_repo
        self._product_repo = product_repo

    def handle(
        self,
        principal: Principal | None,
        days: int = 7,
        today: date | None = None,
    ) -> DashboardDTO:
        require_admin(principal)

        orders = self._order_repo.list_all()
        expenses = self._expense_repo.list_all()
        products = self._product_repo.list_all()
        products_by_id = {p.id: p for p in products}
        today = today or datetime.now(timezone.utc).date()

        revenue = analytics.total_revenue(orders)
        costs = analytics.product_costs(orders, products_by_id)
        spent = analytics.total_expenses(expenses)

        return DashboardDTO(
            total_revenue=revenue,
            product_costs=costs,
            total_expenses=spent,
            net_profit=analytics.net_profit(orders, expenses, products_by_id),
            order_count=len(orders),
            daily_revenue=[
                DailyRevenueDTO(
                    date=row.day.isoformat(),
                    revenue=row.revenue,
                    order_count=row.order_count,
                )
                for row in analytics.daily_revenue(orders, today=today, days=days)
            ],
            category_distribution=analytics.category_distribution(products),
            payment_status_counts=analytics.payment_status_counts(orders),
        )
