"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from storefront.domain.collaborators import UploadedFile
from storefront.domain.model.cart import Cart
from storefront.domain.model.order import Order, PaymentMethod, ShippingDetails
from storefront.domain.model.principal import Principal
from storefront.domain.model.value_objects import Money


@dataclass(frozen=True)
class OrderItemSpec:
    """Input: what the customer asked for (product id + quantity)."""

    product_id: str
    quantity: int


def specs_from_cart(cart: Cart) -> list[OrderItemSpec]:
    return [OrderItemSpec(line.product_id, line.quantity) for line in cart.lines()]


@dataclass(frozen=True)
class CheckoutRequest:
    """Input: one checkout submission — a single product or a cart snapshot."""

    items: list[OrderItemSpec]
    shipping: ShippingDetails
    payment_method: PaymentMethod
    declared_total: Money
    principal: Principal | None = None
    receipt: UploadedFile | None = None
    notes: str = ""


@dataclass(frozen=True)
class OrderLineItemDTO:
    """Output: a single line item as displayed to the user."""

    product_id: str
    product_name: str
    quantity: int
    unit_price: str  # formatted, e.g. "₹350"
    line_total: str


@dataclass(frozen=True)
class OrderDTO:
    """Output: a complete order as displayed to the user."""

    id: int
    customer_name: str
    phone: str
    address: str
    status: str
    payment_status: str
    payment_method: str
    items: list[OrderLineItemDTO]
    total: str
    total_amount: int
    created_at: str
    tracking_number: str | None = None
    payment_receipt_ref: str | None = None
    cancellation_reason: str | None = None
    payment_link: str | None = None


def to_order_dto(order: Order, payment_link: str | None = None) -> OrderDTO:
    shipping = order.shipping
    return OrderDTO(
        id=order.id,  # type: ignore[arg-type]
        customer_name=shipping.name,
        phone=shipping.phone,
        address=f"{shipping.address}, {shipping.city}, {shipping.state} {shipping.pincode}",
        status=order.status.value,
        payment_status=order.payment_status.value,
        payment_method=order.payment_method.value,
        items=[
            OrderLineItemDTO(
                product_id=item.product_id,
                product_name=item.product_name,
                quantity=item.quantity.value,
                unit_price=str(item.unit_price),
                line_total=str(item.line_total),
            )
            for item in order.items
        ],
        total=str(order.total_price),
        total_amount=order.total_price.amount,
        created_at=order.created_at.strftime("%Y-%m-%d %H:%M UTC"),
        tracking_number=order.tracking_number,
        payment_receipt_ref=order.payment_receipt_ref,
        cancellation_reason=order.cancellation_reason,
        payment_link=payment_link,
    )


@dataclass(frozen=True)
class DailyRevenueDTO:
    date: str
    revenue: int
    order_count: int


@dataclass(frozen=True)
class DashboardDTO:
    """Output: pre-aggregated figures for the admin analytics view."""

    total_revenue: int
    product_costs: int
    total_expenses: int
    net_profit: int
    order_count: int
    daily_revenue: list[DailyRevenueDTO] = field(default_factory=list)
    category_distribution: dict[str, int] = field(default_factory=dict)
    payment_status_counts: dict[str, int] = field(default_factory=dict)
