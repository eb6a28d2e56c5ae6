"""Order aggregate — the core of the domain.

The Order is an aggregate root that owns its line items and its two
independent state axes:

* ``status``          — fulfillment: pending → confirmed → processing →
                        shipped → delivered, or cancelled.
* ``payment_status``  — reconciliation of the customer's payment proof:
                        pending → verified | failed.

All business invariants are enforced here.  Persisting a transition is the
application layer's job; it must write the order back with a
compare-and-set on the version it was loaded at (see
``OrderRepository.save_if``).
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from storefront.domain.exceptions import InvalidTransition, ValidationError
from storefront.domain.model.value_objects import Money, Quantity


class OrderStatus(Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class PaymentStatus(Enum):
    PENDING = "pending"
    VERIFIED = "verified"
    FAILED = "failed"


class PaymentMethod(Enum):
    UPI = "upi"
    BANK = "bank"


TERMINAL_STATUSES = frozenset({OrderStatus.DELIVERED, OrderStatus.CANCELLED})

# Targets reachable through the admin status selector.  CONFIRMED is only
# reachable through payment verification.
ADMIN_STATUS_TARGETS = frozenset(
    {
        OrderStatus.PROCESSING,
        OrderStatus.SHIPPED,
        OrderStatus.DELIVERED,
        OrderStatus.CANCELLED,
    }
)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


_PINCODE_RE = re.compile(r"^\d{6}$")


def normalize_phone(raw: str) -> str:
    """Strip a leading +91 and any separators, leaving the bare digits."""
    phone = raw.strip()
    if phone.startswith("+91"):
        phone = phone[3:]
    return re.sub(r"[\s\-()]", "", phone)


@dataclass(frozen=True)
class ShippingDetails:
    """Where the order goes and whom to contact about it."""

    name: str
    phone: str
    address: str
    city: str
    state: str
    pincode: str
    email: str = ""

    def invalid_fields(self) -> list[str]:
        """Return the names of missing or malformed fields (empty if valid)."""
        invalid: list[str] = []
        if not self.name.strip():
            invalid.append("name")
        phone = normalize_phone(self.phone)
        if not (phone.isdigit() and len(phone) == 10):
            invalid.append("phone")
        if self.email.strip() and "@" not in self.email:
            invalid.append("email")
        for name in ("address", "city", "state"):
            if not getattr(self, name).strip():
                invalid.append(name)
        if not _PINCODE_RE.match(self.pincode.strip()):
            invalid.append("pincode")
        return invalid

    def validate(self) -> None:
        invalid = self.invalid_fields()
        if invalid:
            raise ValidationError(
                f"Invalid shipping details: {', '.join(invalid)}", fields=invalid
            )

    def normalized(self) -> ShippingDetails:
        return ShippingDetails(
            name=self.name.strip(),
            phone=normalize_phone(self.phone),
            address=self.address.strip(),
            city=self.city.strip(),
            state=self.state.strip(),
            pincode=self.pincode.strip(),
            email=self.email.strip(),
        )


@dataclass(frozen=True)
class OrderLineItem:
    """Captures the name and price of a product at order-creation time.

    Later catalog edits never reach back into an existing order.
    """

    product_id: str
    product_name: str
    quantity: Quantity
    unit_price: Money  # locked at order-creation time

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity.value


@dataclass
class Order:
    """Aggregate root for customer orders.

    Use the ``Order.create()`` factory for new orders — it enforces all
    business rules.  The plain ``__init__`` lets the repository
    reconstitute persisted orders without re-validating.
    """

    id: int | None
    customer_id: str | None
    shipping: ShippingDetails
    items: list[OrderLineItem]
    total_price: Money
    payment_method: PaymentMethod = PaymentMethod.UPI
    status: OrderStatus = OrderStatus.PENDING
    payment_status: PaymentStatus = PaymentStatus.PENDING
    payment_receipt_ref: str | None = None
    tracking_number: str | None = None
    notes: str = ""
    cancellation_reason: str | None = None
    created_at: datetime = field(default_factory=_utc_now)
    updated_at: datetime | None = None
    version: int = 0  # bumped by every transition

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def create(
        customer_id: str | None,
        shipping: ShippingDetails,
        items: list[OrderLineItem],
        payment_method: PaymentMethod,
        payment_receipt_ref: str | None = None,
        notes: str = "",
    ) -> Order:
        """Create a new order, enforcing all invariants.

        ``total_price`` is computed once, here, from the line-item
        snapshots and stored; it is never recomputed afterwards.
        """
        shipping.validate()
        if not items:
            raise ValidationError("Order must contain at least one item")

        product_ids = [item.product_id for item in items]
        if len(set(product_ids)) != len(product_ids):
            raise ValidationError("Each product may appear only once per order")

        total = Money.zero()
        for item in items:
            total = total + item.line_total

        return Order(
            id=None,
            customer_id=customer_id,
            shipping=shipping.normalized(),
            items=list(items),
            total_price=total,
            payment_method=payment_method,
            payment_receipt_ref=payment_receipt_ref,
            notes=notes.strip(),
        )

    # --- Payment reconciliation ----------------------------------------------

    def verify_payment(self) -> None:
        """Transition payment PENDING -> VERIFIED.

        A pending order becomes CONFIRMED in the same step.  If an admin
        already moved the order forward (processing, shipped, ...) the
        fulfillment status is left alone rather than moved backwards.
        """
        self._require_payment_pending("verify")
        if self.status == OrderStatus.CANCELLED:
            raise InvalidTransition(
                f"Cannot verify payment for order #{self.id} — order is cancelled"
            )
        self.payment_status = PaymentStatus.VERIFIED
        if self.status == OrderStatus.PENDING:
            self.status = OrderStatus.CONFIRMED
        self._touch()

    def reject_payment(self) -> None:
        """Transition payment PENDING -> FAILED.  Fulfillment status is untouched."""
        self._require_payment_pending("reject")
        self.payment_status = PaymentStatus.FAILED
        self._touch()

    def require_payment_proof_allowed(self) -> None:
        """Proof may be (re)submitted while payment is pending or failed."""
        if self.payment_status == PaymentStatus.VERIFIED:
            raise InvalidTransition(
                f"Payment for order #{self.id} is already verified"
            )
        if self.status == OrderStatus.CANCELLED:
            raise InvalidTransition(f"Order #{self.id} is cancelled")

    def attach_payment_proof(self, receipt_ref: str) -> None:
        """Record a (re)submitted payment proof and reopen verification."""
        self.require_payment_proof_allowed()
        self.payment_receipt_ref = receipt_ref
        self.payment_status = PaymentStatus.PENDING
        self._touch()

    # --- Fulfillment ----------------------------------------------------------

    def set_status(self, new_status: OrderStatus) -> None:
        """Admin status override.

        Any non-terminal order may move to processing, shipped, delivered
        or cancelled, including backwards between them.  Delivered and
        cancelled orders are final.
        """
        if self.is_terminal:
            raise InvalidTransition(
                f"Order #{self.id} is {self.status.value} — no further changes allowed"
            )
        if new_status not in ADMIN_STATUS_TARGETS:
            raise InvalidTransition(
                f"Cannot set order #{self.id} to {new_status.value} manually"
            )
        if new_status == self.status:
            raise InvalidTransition(
                f"Order #{self.id} is already {new_status.value}"
            )
        self.status = new_status
        self._touch()

    def cancel(self, reason: str = "") -> None:
        """Customer cancellation: PENDING -> CANCELLED only."""
        if self.status != OrderStatus.PENDING:
            raise InvalidTransition(
                f"Cannot cancel order #{self.id} — current status is "
                f"{self.status.value}, expected pending"
            )
        self.status = OrderStatus.CANCELLED
        self.cancellation_reason = reason.strip() or None
        self._touch()

    def set_tracking_number(self, tracking_number: str) -> None:
        if not tracking_number or not tracking_number.strip():
            raise ValidationError("Tracking number is required", fields=["tracking_number"])
        if self.status == OrderStatus.CANCELLED:
            raise InvalidTransition(f"Order #{self.id} is cancelled")
        self.tracking_number = tracking_number.strip()
        self._touch()

    # --- Computed properties --------------------------------------------------

    @property
    def total_items(self) -> int:
        return sum(item.quantity.value for item in self.items)

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES

    def belongs_to(self, principal_id: str) -> bool:
        return self.customer_id is not None and self.customer_id == principal_id

    # --- Internal helpers -----------------------------------------------------

    def _require_payment_pending(self, action: str) -> None:
        if self.payment_status != PaymentStatus.PENDING:
            raise InvalidTransition(
                f"Cannot {action} payment for order #{self.id} — payment is "
                f"already {self.payment_status.value}"
            )

    def _touch(self) -> None:
        self.updated_at = _utc_now()
        self.version += 1
