"""Application service: admin fulfillment updates.

Covers the status selector (processing / shipped / delivered / cancelled)
and attaching a courier tracking number.
"""

from __future__ import annotations

import logging

from storefront.application.authorization import require_admin
from storefront.application.dto import OrderDTO, to_order_dto
from storefront.application.notices import send_order_notice
from storefront.application.side_effects import SideEffects
from storefront.domain.collaborators import NotificationKind, Notifier
from storefront.domain.exceptions import InvalidTransition, OrderNotFound, ValidationError
from storefront.domain.model.order import Order, OrderStatus
from storefront.domain.model.principal import Principal
from storefront.domain.repository.order_repository import OrderRepository

logger = logging.getLogger(__name__)


def parse_status(raw: str) -> OrderStatus:
    try:
        return OrderStatus(raw.strip().lower())
    except ValueError:
        allowed = ", ".join(s.value for s in OrderStatus)
        raise ValidationError(f"Unknown status '{raw}' (expected one of: {allowed})", fields=["status"])


class UpdateOrderStatusHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        notifier: Notifier,
        side_effects: SideEffects,
    ) -> None:
        self._order_repo = order_repo
        self._notifier = notifier
        self._side_effects = side_effects

    def handle(self, principal: Principal | None, order_id: int, new_status: OrderStatus) -> OrderDTO:
        require_admin(principal)
        order = self._load(order_id)

        previous_status, loaded_version = order.status, order.version
        order.set_status(new_status)
        self._save(order, loaded_version)
        logger.info(
            "Order #%s status %s -> %s", order_id, previous_status.value, new_status.value
        )

        if new_status == OrderStatus.SHIPPED:
            send_order_notice(self._side_effects, self._notifier, order, NotificationKind.ORDER_SHIPPED)
        elif new_status == OrderStatus.CANCELLED:
            send_order_notice(self._side_effects, self._notifier, order, NotificationKind.ORDER_CANCELLED)
        return to_order_dto(order)

    def set_tracking_number(
        self, principal: Principal | None, order_id: int, tracking_number: str
    ) -> OrderDTO:
        require_admin(principal)
        order = self._load(order_id)

        loaded_version = order.version
        order.set_tracking_number(tracking_number)
        self._save(order, loaded_version)
        logger.info("Order #%s tracking number set", order_id)
        return to_order_dto(order)

    # --- Helpers --------------------------------------------------------------

    def _load(self, order_id: int) -> Order:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise OrderNotFound(order_id)
        return order

    def _save(self, order: Order, loaded_version: int) -> None:
        if not self._order_repo.save_if(order, version=loaded_version):
            raise InvalidTransition(
                f"Order #{order.id} was modified by someone else; reload and retry"
            )
