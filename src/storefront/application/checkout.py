"""Application service: Checkout use case.

Turns a single-product selection or a cart snapshot into one persisted
order.  A cart with several products becomes ONE order with several line
items; it is never split into one order per product.

The purchase is all-or-nothing from the caller's point of view: every
check and the receipt upload happen before the single persistence call,
so a late failure cannot leave part of a purchase behind.
"""

from __future__ import annotations

import logging

from storefront.application.dto import CheckoutRequest, OrderDTO, to_order_dto
from storefront.application.notices import send_order_notice
from storefront.application.side_effects import SideEffects
from storefront.domain.collaborators import NotificationKind, Notifier, UploadService
from storefront.domain.exceptions import AmountMismatch, EntityNotFoundError, ValidationError
from storefront.domain.model.order import Order, OrderLineItem
from storefront.domain.model.value_objects import Quantity
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.repository.settings_repository import SettingsRepository
from storefront.domain.service import pricing

logger = logging.getLogger(__name__)


class CheckoutHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
        uploader: UploadService,
        notifier: Notifier,
        side_effects: SideEffects,
        settings_repo: SettingsRepository | None = None,
    ) -> None:
        self._order_repo = order_repo
        self._product_repo = product_repo
        self._uploader = uploader
        self._notifier = notifier
        self._side_effects = side_effects
        self._settings_repo = settings_repo

    def handle(self, request: CheckoutRequest) -> OrderDTO:
        """Place an order.

        Steps:
        1. Validate shipping details (all problems reported at once).
        2. Resolve each product and snapshot its *current* name/price.
        3. Reject the request if the declared total differs from ours.
        4. Upload the payment receipt, if any.
        5. Persist the order, then notify the customer best-effort.
        """
        request.shipping.validate()
        line_items = self._build_line_items(request)

        expected = pricing.cart_total(
            (item.unit_price, item.quantity.value) for item in line_items
        )
        if request.declared_total != expected:
            logger.warning(
                "Checkout rejected: declared %s, computed %s",
                request.declared_total,
                expected,
            )
            raise AmountMismatch(request.declared_total, expected)

        order = Order.create(
            customer_id=request.principal.id if request.principal else None,
            shipping=request.shipping,
            items=line_items,
            payment_method=request.payment_method,
            notes=request.notes,
        )

        if request.receipt is not None:
            order.payment_receipt_ref = self._uploader.upload(request.receipt)

        self._order_repo.save(order)
        logger.info(
            "Order #%s placed: %d item(s), total %s",
            order.id,
            order.total_items,
            order.total_price,
        )

        send_order_notice(self._side_effects, self._notifier, order, NotificationKind.ORDER_PLACED)
        return to_order_dto(order, payment_link=self._payment_link(order))

    # --- Helpers --------------------------------------------------------------

    def _build_line_items(self, request: CheckoutRequest) -> list[OrderLineItem]:
        if not request.items:
            raise ValidationError("Nothing to check out — the cart is empty", fields=["items"])

        line_items: list[OrderLineItem] = []
        for spec in request.items:
            product = self._product_repo.get_by_id(spec.product_id)
            if product is None:
                raise EntityNotFoundError(f"Product not found: '{spec.product_id}'")
            if not product.is_available:
                raise ValidationError(f"'{product.name}' is not available for sale")

            line_items.append(
                OrderLineItem(
                    product_id=product.id,
                    product_name=product.name,
                    quantity=Quantity(spec.quantity),
                    unit_price=product.price,  # <-- price snapshot
                )
            )
        return line_items

    def _payment_link(self, order: Order) -> str | None:
        if self._settings_repo is None:
            return None
        return self._settings_repo.get_payment_settings().upi_payment_uri(order.total_price)
