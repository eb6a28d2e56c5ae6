"""Application service: Submit Payment Proof use case.

Lets a customer upload (or re-upload, after a rejection) the screenshot
of their UPI/bank transfer for an order that is still awaiting payment.
"""

from __future__ import annotations

import logging

from storefront.application.authorization import require_owner_or_admin
from storefront.application.dto import OrderDTO, to_order_dto
from storefront.domain.collaborators import UploadedFile, UploadService
from storefront.domain.exceptions import InvalidTransition, OrderNotFound
from storefront.domain.model.principal import Principal
from storefront.domain.repository.order_repository import OrderRepository

logger = logging.getLogger(__name__)


class SubmitPaymentProofHandler:

    def __init__(self, order_repo: OrderRepository, uploader: UploadService) -> None:
        self._order_repo = order_repo
        self._uploader = uploader

    def handle(self, principal: Principal | None, order_id: int, receipt: UploadedFile) -> OrderDTO:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise OrderNotFound(order_id)
        require_owner_or_admin(principal, order)

        # Checked before uploading so a doomed request leaves no orphaned file.
        order.require_payment_proof_allowed()
        loaded_version = order.version

        order.attach_payment_proof(self._uploader.upload(receipt))
        if not self._order_repo.save_if(order, version=loaded_version):
            raise InvalidTransition(
                f"Order #{order_id} changed while the receipt was uploading; try again"
            )

        logger.info("Payment proof attached to order #%s", order_id)
        return to_order_dto(order)
