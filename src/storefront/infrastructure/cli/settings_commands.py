"""CLI commands for the store's payment instructions."""

from __future__ import annotations

import click

from storefront.application.payment_settings import (
    ShowPaymentSettingsHandler,
    UpdatePaymentSettingsHandler,
)
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import session_store, settings_repository


@click.command("show")
def settings_show() -> None:
    """Show where customers should send money."""
    current = ShowPaymentSettingsHandler(settings_repo=settings_repository()).handle()
    click.echo(f"UPI ID:  {current.upi_id or '(not set)'}")
    click.echo(f"Payee:   {current.payee_name or '(not set)'}")
    click.echo(f"Bank:    {current.bank_details or '(not set)'}")


@click.command("payment")
@click.option("--upi", "upi_id", default=None, help="UPI id, e.g. shop@okaxis.")
@click.option("--payee", "payee_name", default=None, help="Name shown in UPI apps.")
@click.option("--bank", "bank_details", default=None, help="Bank transfer details.")
def settings_payment(upi_id: str | None, payee_name: str | None, bank_details: str | None) -> None:
    """Update payment instructions (admin)."""
    handler = UpdatePaymentSettingsHandler(settings_repo=settings_repository())

    try:
        handler.handle(
            session_store().current_principal(),
            upi_id=upi_id,
            payee_name=payee_name,
            bank_details=bank_details,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo("Payment methods updated.")
