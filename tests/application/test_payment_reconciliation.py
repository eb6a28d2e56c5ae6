"""Integration tests for payment proof, verification and rejection."""

import pytest

from storefront.application.reject_payment import RejectPaymentHandler
from storefront.application.side_effects import InlineSideEffects
from storefront.application.submit_payment_proof import SubmitPaymentProofHandler
from storefront.application.verify_payment import VerifyPaymentHandler
from storefront.domain.collaborators import NotificationKind, UploadedFile
from storefront.domain.exceptions import InvalidTransition, OrderNotFound, Unauthorized
from storefront.domain.model.order import OrderStatus, PaymentStatus
from tests.fakes import (
    ADMIN,
    CUSTOMER,
    OTHER_CUSTOMER,
    FailingNotifier,
    FakeInvoiceGenerator,
    FakeNotifier,
    FakeOrderRepository,
    FakeUploadService,
    make_order,
)


def _verify_handler(order_repo, notifier=None, invoices=None):
    return VerifyPaymentHandler(
        order_repo=order_repo,
        notifier=notifier or FakeNotifier(),
        invoices=invoices or FakeInvoiceGenerator(),
        side_effects=InlineSideEffects(),
    )


def _reject_handler(order_repo, notifier=None):
    return RejectPaymentHandler(
        order_repo=order_repo,
        notifier=notifier or FakeNotifier(),
        side_effects=InlineSideEffects(),
    )


class TestVerifyPayment:

    def test_verify_confirms_order(self):
        order_repo = FakeOrderRepository([make_order()])
        notifier = FakeNotifier()
        invoices = FakeInvoiceGenerator()

        dto = _verify_handler(order_repo, notifier, invoices).handle(ADMIN, 1)

        assert dto.status == "confirmed"
        saved = order_repo.get_by_id(1)
        assert saved.payment_status == PaymentStatus.VERIFIED
        assert saved.status == OrderStatus.CONFIRMED
        assert notifier.kinds == [NotificationKind.PAYMENT_VERIFIED]
        assert invoices.generated == [1]

    def test_verify_twice_rejected(self):
        order_repo = FakeOrderRepository([make_order()])
        notifier, invoices = FakeNotifier(), FakeInvoiceGenerator()
        handler = _verify_handler(order_repo, notifier=notifier, invoices=invoices)
        handler.handle(ADMIN, 1)
        with pytest.raises(InvalidTransition, match="already verified"):
            handler.handle(ADMIN, 1)

        assert notifier.kinds == [NotificationKind.PAYMENT_VERIFIED]
        assert invoices.generated == [1]

    def test_notifier_and_invoice_failures_keep_order_verified(self):
        order_repo = FakeOrderRepository([make_order()])
        handler = _verify_handler(
            order_repo, notifier=FailingNotifier(), invoices=FakeInvoiceGenerator(fail=True)
        )

        handler.handle(ADMIN, 1)

        assert order_repo.get_by_id(1).payment_status == PaymentStatus.VERIFIED

    def test_requires_admin(self):
        order_repo = FakeOrderRepository([make_order()])
        with pytest.raises(Unauthorized, match="Admin"):
            _verify_handler(order_repo).handle(CUSTOMER, 1)
        assert order_repo.get_by_id(1).payment_status == PaymentStatus.PENDING

    def test_missing_order(self):
        with pytest.raises(OrderNotFound, match="#99"):
            _verify_handler(FakeOrderRepository()).handle(ADMIN, 99)

    def test_concurrent_rejection_wins(self):
        order_repo = FakeOrderRepository([make_order()])

        class RejectingBetweenReadAndWrite(FakeOrderRepository):
            def get_by_id(self, order_id):
                order = order_repo.get_by_id(order_id)
                _reject_handler(order_repo).handle(ADMIN, order_id)
                return order

            def save_if(self, order, **expected):
                return order_repo.save_if(order, **expected)

        with pytest.raises(InvalidTransition, match="modified by someone else"):
            _verify_handler(RejectingBetweenReadAndWrite()).handle(ADMIN, 1)
        assert order_repo.get_by_id(1).payment_status == PaymentStatus.FAILED


class TestRejectPayment:

    def test_reject_keeps_order_status(self):
        order_repo = FakeOrderRepository([make_order()])
        notifier = FakeNotifier()

        dto = _reject_handler(order_repo, notifier).handle(ADMIN, 1)

        assert dto.payment_status == "failed"
        assert dto.status == "pending"
        assert notifier.kinds == [NotificationKind.PAYMENT_REJECTED]

    def test_reject_verified_rejected(self):
        order_repo = FakeOrderRepository([make_order()])
        _verify_handler(order_repo).handle(ADMIN, 1)
        with pytest.raises(InvalidTransition):
            _reject_handler(order_repo).handle(ADMIN, 1)


class TestSubmitPaymentProof:

    def test_resubmit_after_rejection_then_verify(self):
        order_repo = FakeOrderRepository([make_order()])
        uploader = FakeUploadService()
        _reject_handler(order_repo).handle(ADMIN, 1)

        dto = SubmitPaymentProofHandler(order_repo, uploader).handle(
            CUSTOMER, 1, UploadedFile("retry.jpg", b"jpeg")
        )
        assert dto.payment_status == "pending"
        assert dto.payment_receipt_ref.endswith("retry.jpg")

        _verify_handler(order_repo).handle(ADMIN, 1)
        assert order_repo.get_by_id(1).status == OrderStatus.CONFIRMED

    def test_other_customer_refused(self):
        order_repo = FakeOrderRepository([make_order()])
        with pytest.raises(Unauthorized, match="does not belong"):
            SubmitPaymentProofHandler(order_repo, FakeUploadService()).handle(
                OTHER_CUSTOMER, 1, UploadedFile("r.png", b"png")
            )

    def test_verified_order_refused_before_upload(self):
        order_repo = FakeOrderRepository([make_order()])
        uploader = FakeUploadService()
        _verify_handler(order_repo).handle(ADMIN, 1)

        with pytest.raises(InvalidTransition, match="already verified"):
            SubmitPaymentProofHandler(order_repo, uploader).handle(
                CUSTOMER, 1, UploadedFile("r.png", b"png")
            )
        assert uploader.uploaded == []
