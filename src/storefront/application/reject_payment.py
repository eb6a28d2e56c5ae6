"""Application service: Reject Payment use case.

Marks the payment FAILED.  The order itself is NOT cancelled; the
customer can upload a new receipt and the admin can verify it later.
"""

from __future__ import annotations

import logging

from storefront.application.authorization import require_admin
from storefront.application.dto import OrderDTO, to_order_dto
from storefront.application.notices import send_order_notice
from storefront.application.side_effects import SideEffects
from storefront.domain.collaborators import NotificationKind, Notifier
from storefront.domain.exceptions import InvalidTransition, OrderNotFound
from storefront.domain.model.principal import Principal
from storefront.domain.repository.order_repository import OrderRepository

logger = logging.getLogger(__name__)


class RejectPaymentHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        notifier: Notifier,
        side_effects: SideEffects,
    ) -> None:
        self._order_repo = order_repo
        self._notifier = notifier
        self._side_effects = side_effects

    def handle(self, principal: Principal | None, order_id: int) -> OrderDTO:
        require_admin(principal)

        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise OrderNotFound(order_id)

        loaded_version = order.version
        order.reject_payment()

        if not self._order_repo.save_if(order, version=loaded_version):
            raise InvalidTransition(
                f"Order #{order_id} was modified by someone else; reload and retry"
            )
        logger.info("Payment for order #%s rejected by %s", order_id, principal.id)

        send_order_notice(self._side_effects, self._notifier, order, NotificationKind.PAYMENT_REJECTED)
        return to_order_dto(order)
