"""CLI commands for payment reconciliation (admin)."""

from __future__ import annotations

import click

from storefront.application.reject_payment import RejectPaymentHandler
from storefront.application.verify_payment import VerifyPaymentHandler
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import (
    invoice_generator,
    notifier,
    order_repository,
    session_store,
    side_effects,
)


@click.command("verify")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to verify.")
def payment_verify(order_id: int) -> None:
    """Mark the customer's payment as received (confirms the order)."""
    effects = side_effects()
    handler = VerifyPaymentHandler(
        order_repo=order_repository(),
        notifier=notifier(),
        invoices=invoice_generator(),
        side_effects=effects,
    )

    try:
        dto = handler.handle(session_store().current_principal(), order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))
    finally:
        effects.close()

    click.echo(f"Payment for order #{order_id} verified — order {dto.status}.")


@click.command("reject")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to reject.")
def payment_reject(order_id: int) -> None:
    """Mark the customer's payment proof as invalid."""
    effects = side_effects()
    handler = RejectPaymentHandler(
        order_repo=order_repository(), notifier=notifier(), side_effects=effects
    )

    try:
        handler.handle(session_store().current_principal(), order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))
    finally:
        effects.close()

    click.echo(f"Payment for order #{order_id} rejected.")
