"""Customer-facing SMS texts and the helper that dispatches them."""

from __future__ import annotations

from storefront.application.side_effects import SideEffects
from storefront.domain.collaborators import NotificationKind, Notifier
from storefront.domain.model.order import Order

_TEMPLATES = {
    NotificationKind.ORDER_PLACED: (
        "Hi {name}, order #{id} for {total} is placed. "
        "We will confirm once your payment is verified."
    ),
    NotificationKind.PAYMENT_VERIFIED: (
        "Hi {name}, payment of {total} for order #{id} is verified. "
        "Your order is confirmed."
    ),
    NotificationKind.PAYMENT_REJECTED: (
        "Hi {name}, we could not verify the payment for order #{id}. "
        "Please upload a valid payment receipt."
    ),
    NotificationKind.ORDER_SHIPPED: (
        "Hi {name}, order #{id} has shipped.{tracking}"
    ),
    NotificationKind.ORDER_CANCELLED: (
        "Hi {name}, order #{id} has been cancelled."
    ),
}


def render(kind: NotificationKind, order: Order) -> str:
    tracking = f" Tracking ID: {order.tracking_number}" if order.tracking_number else ""
    return _TEMPLATES[kind].format(
        name=order.shipping.name,
        id=order.id,
        total=order.total_price,
        tracking=tracking,
    )


def send_order_notice(
    side_effects: SideEffects,
    notifier: Notifier,
    order: Order,
    kind: NotificationKind,
) -> None:
    message = render(kind, order)
    side_effects.submit(
        f"{kind.value} SMS for order #{order.id}",
        notifier.notify,
        order.shipping.phone,
        message,
        kind,
    )
