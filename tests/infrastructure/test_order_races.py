"""Interleaved admin actions against the JSON order store.

Each test lets one handler load an order, runs a second handler to
completion, and only then lets the first one write.  The late writer must
be refused rather than overwrite the other change.
"""

import pytest

from storefront.application.reject_payment import RejectPaymentHandler
from storefront.application.side_effects import InlineSideEffects
from storefront.application.update_order_status import UpdateOrderStatusHandler
from storefront.application.verify_payment import VerifyPaymentHandler
from storefront.domain.exceptions import InvalidTransition
from storefront.domain.model.order import OrderStatus, PaymentStatus
from storefront.domain.repository.order_repository import OrderRepository
from storefront.infrastructure.persistence.json_order_repository import JsonOrderRepository
from tests.fakes import ADMIN, FakeInvoiceGenerator, FakeNotifier, make_order


class _InterleavingRepository(OrderRepository):
    """Runs *between* right after the first read, then hands back the stale copy."""

    def __init__(self, inner: OrderRepository, between) -> None:
        self._inner = inner
        self._between = between

    def next_id(self):
        return self._inner.next_id()

    def get_by_id(self, order_id):
        order = self._inner.get_by_id(order_id)
        if self._between is not None:
            between, self._between = self._between, None
            between()
        return order

    def list_all(self):
        return self._inner.list_all()

    def save(self, order):
        self._inner.save(order)

    def save_if(self, order, **expected):
        return self._inner.save_if(order, **expected)


def _status_handler(order_repo):
    return UpdateOrderStatusHandler(
        order_repo=order_repo, notifier=FakeNotifier(), side_effects=InlineSideEffects()
    )


def _verify_handler(order_repo):
    return VerifyPaymentHandler(
        order_repo=order_repo,
        notifier=FakeNotifier(),
        invoices=FakeInvoiceGenerator(),
        side_effects=InlineSideEffects(),
    )


def _reject_handler(order_repo):
    return RejectPaymentHandler(
        order_repo=order_repo, notifier=FakeNotifier(), side_effects=InlineSideEffects()
    )


@pytest.fixture
def store(tmp_path):
    repo = JsonOrderRepository(tmp_path / "orders.json")
    repo.save(make_order())
    return repo


def test_version_is_bumped_and_persisted(store):
    order = store.get_by_id(1)
    assert order.version == 0

    order.set_status(OrderStatus.PROCESSING)
    assert store.save_if(order, version=0)

    assert store.get_by_id(1).version == 1
    assert not store.save_if(order, version=0)


def test_ship_after_concurrent_verify_is_refused(store):
    _status_handler(store).handle(ADMIN, 1, OrderStatus.PROCESSING)
    racing = _InterleavingRepository(store, lambda: _verify_handler(store).handle(ADMIN, 1))

    with pytest.raises(InvalidTransition, match="modified by someone else"):
        _status_handler(racing).handle(ADMIN, 1, OrderStatus.SHIPPED)

    saved = store.get_by_id(1)
    assert saved.status == OrderStatus.PROCESSING
    assert saved.payment_status == PaymentStatus.VERIFIED


def test_reject_after_concurrent_status_change_is_refused(store):
    racing = _InterleavingRepository(
        store, lambda: _status_handler(store).handle(ADMIN, 1, OrderStatus.PROCESSING)
    )

    with pytest.raises(InvalidTransition, match="modified by someone else"):
        _reject_handler(racing).handle(ADMIN, 1)

    saved = store.get_by_id(1)
    assert saved.status == OrderStatus.PROCESSING
    assert saved.payment_status == PaymentStatus.PENDING


def test_tracking_number_after_concurrent_reject_is_refused(store):
    racing = _InterleavingRepository(store, lambda: _reject_handler(store).handle(ADMIN, 1))

    with pytest.raises(InvalidTransition):
        _status_handler(racing).set_tracking_number(ADMIN, 1, "DTDC123")

    saved = store.get_by_id(1)
    assert saved.tracking_number is None
    assert saved.payment_status == PaymentStatus.FAILED
