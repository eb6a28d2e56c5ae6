"""Application service: order queries (single order, listings, tracking)."""

from __future__ import annotations

from storefront.application.authorization import require_owner_or_admin
from storefront.application.dto import OrderDTO, to_order_dto
from storefront.domain.exceptions import OrderNotFound, Unauthorized
from storefront.domain.model.order import OrderStatus, normalize_phone
from storefront.domain.model.principal import Principal
from storefront.domain.repository.order_repository import OrderRepository


class ShowOrderHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, principal: Principal | None, order_id: int) -> OrderDTO:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise OrderNotFound(order_id)
        require_owner_or_admin(principal, order)
        return to_order_dto(order)

    def track(self, order_id: int, phone: str) -> OrderDTO:
        """Guest lookup: the phone number on the order acts as the password."""
        order = self._order_repo.get_by_id(order_id)
        if order is None or order.shipping.phone != normalize_phone(phone):
            raise OrderNotFound(order_id)
        return to_order_dto(order)


class ListOrdersHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(
        self, principal: Principal | None, status: OrderStatus | None = None
    ) -> list[OrderDTO]:
        """Admins see every order, customers only their own.  Newest first."""
        if principal is None:
            raise Unauthorized("Login required")
        orders = self._order_repo.list_all()
        if not principal.is_admin:
            orders = [o for o in orders if o.belongs_to(principal.id)]
        if status is not None:
            orders = [o for o in orders if o.status == status]
        orders.sort(key=lambda o: o.created_at, reverse=True)
        return [to_order_dto(o) for o in orders]
