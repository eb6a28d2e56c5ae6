"""Application service: Verify Payment use case.

The admin confirms that the customer's transfer arrived.  Payment becomes
VERIFIED and a pending order becomes CONFIRMED in one conditional write.
The confirmation SMS and the invoice are best-effort: if either fails the
order stays verified and the failure is only logged.
"""

from __future__ import annotations

import logging

from storefront.application.authorization import require_admin
from storefront.application.dto import OrderDTO, to_order_dto
from storefront.application.notices import send_order_notice
from storefront.application.side_effects import SideEffects
from storefront.domain.collaborators import InvoiceGenerator, NotificationKind, Notifier
from storefront.domain.exceptions import InvalidTransition, OrderNotFound
from storefront.domain.model.order import Order
from storefront.domain.model.principal import Principal
from storefront.domain.repository.order_repository import OrderRepository

logger = logging.getLogger(__name__)


class VerifyPaymentHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        notifier: Notifier,
        invoices: InvoiceGenerator,
        side_effects: SideEffects,
    ) -> None:
        self._order_repo = order_repo
        self._notifier = notifier
        self._invoices = invoices
        self._side_effects = side_effects

    def handle(self, principal: Principal | None, order_id: int) -> OrderDTO:
        require_admin(principal)

        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise OrderNotFound(order_id)

        loaded_version = order.version
        order.verify_payment()

        if not self._order_repo.save_if(order, version=loaded_version):
            raise InvalidTransition(
                f"Order #{order_id} was modified by someone else; reload and retry"
            )
        logger.info("Payment for order #%s verified by %s", order_id, principal.id)

        send_order_notice(self._side_effects, self._notifier, order, NotificationKind.PAYMENT_VERIFIED)
        self._side_effects.submit(
            f"invoice for order #{order_id}", self._generate_invoice, order
        )
        return to_order_dto(order)

    def _generate_invoice(self, order: Order) -> None:
        ref = self._invoices.generate_invoice(order)
        logger.info("Invoice for order #%s written to %s", order.id, ref)
