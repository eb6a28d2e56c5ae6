"""Application service: Cancel Order use case (customer side).

A customer may cancel their own order only while it is still pending.
Admins cancel through the status selector instead.
"""

from __future__ import annotations

import logging

from storefront.application.authorization import require_owner_or_admin
from storefront.application.dto import OrderDTO, to_order_dto
from storefront.domain.exceptions import InvalidTransition, OrderNotFound
from storefront.domain.model.principal import Principal
from storefront.domain.repository.order_repository import OrderRepository

logger = logging.getLogger(__name__)


class CancelOrderHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, principal: Principal | None, order_id: int, reason: str = "") -> OrderDTO:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise OrderNotFound(order_id)
        require_owner_or_admin(principal, order)

        loaded_version = order.version
        order.cancel(reason)
        if not self._order_repo.save_if(order, version=loaded_version):
            raise InvalidTransition(
                f"Order #{order_id} is no longer pending and cannot be cancelled"
            )

        logger.info("Order #%s cancelled by customer", order_id)
        return to_order_dto(order)
