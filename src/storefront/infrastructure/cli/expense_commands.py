"""CLI commands for the expense ledger (admin)."""

from __future__ import annotations

from datetime import datetime

import click

from storefront.application.record_expense import ListExpensesHandler, RecordExpenseHandler
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import expense_repository, session_store


def _entry_options(fn):
    fn = click.option("--date", "payment_date", type=click.DateTime(formats=["%Y-%m-%d"]),
                      default=None, help="Payment date (YYYY-MM-DD, default today).")(fn)
    fn = click.option("--description", default="")(fn)
    fn = click.option("--amount", required=True, type=click.IntRange(min=1), help="Whole rupees.")(fn)
    fn = click.option("--category", required=True, help="e.g. packaging, shipping, rent.")(fn)
    return fn


@click.command("add")
@_entry_options
def expense_add(category: str, amount: int, description: str, payment_date: datetime | None) -> None:
    """Record money spent."""
    handler = RecordExpenseHandler(expense_repo=expense_repository())

    try:
        dto = handler.handle(
            session_store().current_principal(),
            category=category,
            amount=amount,
            description=description,
            payment_date=payment_date.date() if payment_date else None,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Expense #{dto.id} recorded: {dto.category} {dto.display_amount}")


@click.command("income")
@_entry_options
def expense_income(category: str, amount: int, description: str, payment_date: datetime | None) -> None:
    """Record income received outside of orders."""
    handler = RecordExpenseHandler(expense_repo=expense_repository())

    try:
        dto = handler.record_income(
            session_store().current_principal(),
            category=category,
            amount=amount,
            description=description,
            payment_date=payment_date.date() if payment_date else None,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Income #{dto.id} recorded: {dto.category} {dto.display_amount}")


@click.command("list")
def expense_list() -> None:
    """Show the ledger, newest first."""
    handler = ListExpensesHandler(expense_repo=expense_repository())

    try:
        entries = handler.handle(session_store().current_principal())
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not entries:
        click.echo("No ledger entries.")
        return

    click.echo(f"{'ID':<5} {'Date':<11} {'Kind':<8} {'Category':<14} {'Amount':>12}  Description")
    click.echo("-" * 70)
    for e in entries:
        click.echo(
            f"{e.id:<5} {e.payment_date:<11} {e.kind:<8} {e.category:<14} "
            f"{e.display_amount:>12}  {e.description}"
        )
