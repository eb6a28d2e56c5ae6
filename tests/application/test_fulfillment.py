"""Integration tests for admin status updates and customer cancellation."""

import pytest

from storefront.application.cancel_order import CancelOrderHandler
from storefront.application.side_effects import InlineSideEffects
from storefront.application.update_order_status import UpdateOrderStatusHandler, parse_status
from storefront.domain.collaborators import NotificationKind
from storefront.domain.exceptions import InvalidTransition, Unauthorized, ValidationError
from storefront.domain.model.order import OrderStatus
from tests.fakes import (
    ADMIN,
    CUSTOMER,
    OTHER_CUSTOMER,
    FakeNotifier,
    FakeOrderRepository,
    make_order,
)


def _status_handler(order_repo, notifier=None):
    return UpdateOrderStatusHandler(
        order_repo=order_repo,
        notifier=notifier or FakeNotifier(),
        side_effects=InlineSideEffects(),
    )


class TestUpdateOrderStatus:

    def test_ship_sends_sms_with_tracking(self):
        order_repo = FakeOrderRepository([make_order()])
        notifier = FakeNotifier()
        handler = _status_handler(order_repo, notifier)

        handler.set_tracking_number(ADMIN, 1, "AWB123")
        dto = handler.handle(ADMIN, 1, OrderStatus.SHIPPED)

        assert dto.status == "shipped"
        assert notifier.kinds == [NotificationKind.ORDER_SHIPPED]
        assert "AWB123" in notifier.sent[0][1]

    def test_processing_sends_nothing(self):
        order_repo = FakeOrderRepository([make_order()])
        notifier = FakeNotifier()
        _status_handler(order_repo, notifier).handle(ADMIN, 1, OrderStatus.PROCESSING)
        assert notifier.sent == []

    def test_delivered_is_final(self):
        order_repo = FakeOrderRepository([make_order()])
        handler = _status_handler(order_repo)
        handler.handle(ADMIN, 1, OrderStatus.DELIVERED)
        with pytest.raises(InvalidTransition):
            handler.handle(ADMIN, 1, OrderStatus.SHIPPED)

    def test_customer_cannot_change_status(self):
        order_repo = FakeOrderRepository([make_order()])
        with pytest.raises(Unauthorized):
            _status_handler(order_repo).handle(CUSTOMER, 1, OrderStatus.SHIPPED)

    def test_parse_status(self):
        assert parse_status(" Shipped ") == OrderStatus.SHIPPED
        with pytest.raises(ValidationError, match="Unknown status"):
            parse_status("lost")


class TestCancelOrder:

    def test_owner_cancels_pending(self):
        order_repo = FakeOrderRepository([make_order()])
        dto = CancelOrderHandler(order_repo).handle(CUSTOMER, 1, "changed my mind")
        assert dto.status == "cancelled"
        assert dto.cancellation_reason == "changed my mind"

    def test_shipped_order_cannot_be_cancelled(self):
        order_repo = FakeOrderRepository([make_order()])
        _status_handler(order_repo).handle(ADMIN, 1, OrderStatus.SHIPPED)
        with pytest.raises(InvalidTransition):
            CancelOrderHandler(order_repo).handle(CUSTOMER, 1)
        assert order_repo.get_by_id(1).status == OrderStatus.SHIPPED

    def test_other_customer_refused(self):
        order_repo = FakeOrderRepository([make_order()])
        with pytest.raises(Unauthorized):
            CancelOrderHandler(order_repo).handle(OTHER_CUSTOMER, 1)

    def test_guest_cannot_cancel(self):
        order_repo = FakeOrderRepository([make_order(customer_id=None)])
        with pytest.raises(Unauthorized, match="Login required"):
            CancelOrderHandler(order_repo).handle(None, 1)
