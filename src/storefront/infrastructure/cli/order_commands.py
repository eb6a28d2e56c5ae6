"""CLI commands for the Order aggregate: checkout, queries and fulfillment."""

from __future__ import annotations

from pathlib import Path

import click

from storefront.application.cancel_order import CancelOrderHandler
from storefront.application.checkout import CheckoutHandler
from storefront.application.dto import CheckoutRequest, OrderDTO, specs_from_cart
from storefront.application.show_order import ListOrdersHandler, ShowOrderHandler
from storefront.application.submit_payment_proof import SubmitPaymentProofHandler
from storefront.application.update_order_status import UpdateOrderStatusHandler, parse_status
from storefront.domain.collaborators import UploadedFile
from storefront.domain.exceptions import AmountMismatch, DomainException
from storefront.domain.model.cart import Cart
from storefront.domain.model.order import PaymentMethod, ShippingDetails
from storefront.domain.model.value_objects import Money
from storefront.infrastructure.bootstrap import (
    notifier,
    order_repository,
    product_repository,
    session_store,
    settings_repository,
    side_effects,
    upload_service,
)


def _parse_items(raw: str) -> list[tuple[str, int]]:
    """Parse '1:3,4:5' into (product_id, quantity) pairs."""
    pairs: list[tuple[str, int]] = []
    for pair in raw.split(","):
        pair = pair.strip()
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid item format '{pair}'. Expected 'ProductId:Quantity'."
            )
        product_id, qty_str = pair.rsplit(":", 1)
        try:
            qty = int(qty_str)
        except ValueError:
            raise click.BadParameter(
                f"Invalid quantity '{qty_str}' for product '{product_id}'."
            )
        pairs.append((product_id.strip(), qty))
    return pairs


def _read_receipt(path: str | None) -> UploadedFile | None:
    if path is None:
        return None
    file_path = Path(path)
    return UploadedFile(filename=file_path.name, content=file_path.read_bytes())


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order #{dto.id}  (status={dto.status}, payment={dto.payment_status})")
    click.echo(f"Customer: {dto.customer_name}  {dto.phone}")
    click.echo(f"Ship to:  {dto.address}")
    click.echo(f"Created:  {dto.created_at}")
    if dto.tracking_number:
        click.echo(f"Tracking: {dto.tracking_number}")
    if dto.cancellation_reason:
        click.echo(f"Cancelled: {dto.cancellation_reason}")
    click.echo()
    click.echo(f"  {'Product':<28} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*55}")
    for item in dto.items:
        click.echo(
            f"  {item.product_name:<28} {item.quantity:>5} {item.unit_price:>10} {item.line_total:>10}"
        )
    click.echo(f"  {'-'*55}")
    click.echo(f"  {'Order Total':<35} {dto.total:>20}")


@click.command("checkout")
@click.option("--items", required=True, help="Items as 'ProductId:Qty,ProductId:Qty'.")
@click.option("--name", required=True, help="Customer name.")
@click.option("--phone", required=True, help="10-digit mobile number.")
@click.option("--email", default="", help="Email address (optional).")
@click.option("--address", required=True, help="Street address.")
@click.option("--city", required=True)
@click.option("--state", required=True)
@click.option("--pincode", required=True, help="6-digit PIN code.")
@click.option(
    "--method",
    type=click.Choice([m.value for m in PaymentMethod]),
    default=PaymentMethod.UPI.value,
    show_default=True,
    help="How the customer pays.",
)
@click.option("--declared-total", default=None, help="Total shown to the customer (defaults to the cart total).")
@click.option("--receipt", type=click.Path(exists=True, dir_okay=False), default=None, help="Payment screenshot.")
@click.option("--notes", default="", help="Special instructions.")
def order_checkout(
    items: str,
    name: str,
    phone: str,
    email: str,
    address: str,
    city: str,
    state: str,
    pincode: str,
    method: str,
    declared_total: str | None,
    receipt: str | None,
    notes: str,
) -> None:
    """Place an order for one or more products."""
    products = product_repository()
    cart = Cart()
    for product_id, qty in _parse_items(items):
        product = products.get_by_id(product_id)
        if product is None:
            raise click.ClickException(f"Product not found: '{product_id}'")
        cart.add(product, qty)

    effects = side_effects()
    handler = CheckoutHandler(
        order_repo=order_repository(),
        product_repo=products,
        uploader=upload_service(),
        notifier=notifier(),
        side_effects=effects,
        settings_repo=settings_repository(),
    )

    try:
        request = CheckoutRequest(
            items=specs_from_cart(cart),
            shipping=ShippingDetails(
                name=name,
                phone=phone,
                email=email,
                address=address,
                city=city,
                state=state,
                pincode=pincode,
            ),
            payment_method=PaymentMethod(method),
            declared_total=Money.of(declared_total) if declared_total else cart.total_price(),
            principal=session_store().current_principal(),
            receipt=_read_receipt(receipt),
            notes=notes,
        )
        dto = handler.handle(request)
    except AmountMismatch as exc:
        cart.reprice({p.id: p for p in products.list_all()})
        raise click.ClickException(f"{exc}\n  Current cart total: {cart.total_price()}")
    except DomainException as exc:
        raise click.ClickException(str(exc))
    finally:
        effects.close()

    click.echo(f"Order #{dto.id} placed  (status={dto.status}, payment={dto.payment_status})")
    click.echo(f"Total: {dto.total}")
    if dto.payment_link:
        click.echo(f"Pay via UPI: {dto.payment_link}")
    if dto.payment_receipt_ref is None:
        click.echo(f"Upload your payment screenshot with: storefront order proof --id {dto.id} --receipt FILE")


@click.command("show")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to display.")
def order_show(order_id: int) -> None:
    """Show details of an existing order."""
    handler = ShowOrderHandler(order_repo=order_repository())

    try:
        dto = handler.handle(session_store().current_principal(), order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("track")
@click.option("--id", "order_id", required=True, type=int, help="Order ID.")
@click.option("--phone", required=True, help="Phone number used at checkout.")
def order_track(order_id: int, phone: str) -> None:
    """Look up an order without logging in."""
    handler = ShowOrderHandler(order_repo=order_repository())

    try:
        dto = handler.track(order_id, phone)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("list")
@click.option("--status", default=None, help="Only orders in this status.")
def order_list(status: str | None) -> None:
    """List orders (all orders for admins, your own otherwise)."""
    handler = ListOrdersHandler(order_repo=order_repository())

    try:
        wanted = parse_status(status) if status else None
        orders = handler.handle(session_store().current_principal(), wanted)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not orders:
        click.echo("No orders found.")
        return

    click.echo(f"{'ID':<6} {'Customer':<20} {'Status':<11} {'Payment':<9} {'Total':>10}  Created")
    click.echo("-" * 78)
    for dto in orders:
        click.echo(
            f"{dto.id:<6} {dto.customer_name:<20} {dto.status:<11} "
            f"{dto.payment_status:<9} {dto.total:>10}  {dto.created_at}"
        )


@click.command("cancel")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to cancel.")
@click.option("--reason", default="", help="Why the order is being cancelled.")
def order_cancel(order_id: int, reason: str) -> None:
    """Cancel your order while it is still pending."""
    handler = CancelOrderHandler(order_repo=order_repository())

    try:
        handler.handle(session_store().current_principal(), order_id, reason)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{order_id} cancelled.")


@click.command("proof")
@click.option("--id", "order_id", required=True, type=int, help="Order ID.")
@click.option("--receipt", required=True, type=click.Path(exists=True, dir_okay=False), help="Payment screenshot.")
def order_proof(order_id: int, receipt: str) -> None:
    """Upload (or re-upload) the payment screenshot for an order."""
    handler = SubmitPaymentProofHandler(order_repo=order_repository(), uploader=upload_service())

    try:
        handler.handle(session_store().current_principal(), order_id, _read_receipt(receipt))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Payment proof for order #{order_id} submitted — awaiting verification.")


@click.command("status")
@click.option("--id", "order_id", required=True, type=int, help="Order ID.")
@click.option(
    "--set",
    "new_status",
    required=True,
    type=click.Choice(["processing", "shipped", "delivered", "cancelled"]),
    help="New fulfillment status.",
)
def order_status(order_id: int, new_status: str) -> None:
    """Move an order through fulfillment (admin)."""
    effects = side_effects()
    handler = UpdateOrderStatusHandler(
        order_repo=order_repository(), notifier=notifier(), side_effects=effects
    )

    try:
        dto = handler.handle(session_store().current_principal(), order_id, parse_status(new_status))
    except DomainException as exc:
        raise click.ClickException(str(exc))
    finally:
        effects.close()

    click.echo(f"Order #{order_id} is now {dto.status}.")


@click.command("tracking")
@click.option("--id", "order_id", required=True, type=int, help="Order ID.")
@click.option("--number", required=True, help="Courier tracking number.")
def order_tracking(order_id: int, number: str) -> None:
    """Attach a courier tracking number (admin)."""
    handler = UpdateOrderStatusHandler(
        order_repo=order_repository(), notifier=notifier(), side_effects=side_effects()
    )

    try:
        handler.set_tracking_number(session_store().current_principal(), order_id, number)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{order_id} tracking number set to {number.strip()}.")
