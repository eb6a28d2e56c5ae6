"""CLI commands for the admin analytics report."""

from __future__ import annotations

import click

from storefront.application.show_dashboard import ShowDashboardHandler
from storefront.domain.exceptions import DomainException
from storefront.domain.model.value_objects import format_amount
from storefront.infrastructure.bootstrap import (
    expense_repository,
    order_repository,
    product_repository,
    session_store,
)


@click.command("dashboard")
@click.option("--days", default=7, show_default=True, type=click.IntRange(min=1), help="Days of revenue history.")
def report_dashboard(days: int) -> None:
    """Revenue, costs and profit from verified orders."""
    handler = ShowDashboardHandler(
        order_repo=order_repository(),
        expense_repo=expense_repository(),
        product_repo=product_repository(),
    )

    try:
        dto = handler.handle(session_store().current_principal(), days=days)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"{'Total revenue':<20} {format_amount(dto.total_revenue):>14}")
    click.echo(f"{'Product costs':<20} {format_amount(dto.product_costs):>14}")
    click.echo(f"{'Expenses (net)':<20} {format_amount(dto.total_expenses):>14}")
    click.echo(f"{'Net profit':<20} {format_amount(dto.net_profit):>14}")
    click.echo()
    pending = dto.payment_status_counts.get("pending", 0)
    click.echo(f"Orders: {dto.order_count}  (awaiting payment verification: {pending})")
    click.echo()
    click.echo(f"{'Date':<12} {'Orders':>7} {'Revenue':>12}")
    for row in dto.daily_revenue:
        click.echo(f"{row.date:<12} {row.order_count:>7} {format_amount(row.revenue):>12}")
    if dto.category_distribution:
        click.echo()
        click.echo("Products per category:")
        for category, count in dto.category_distribution.items():
            click.echo(f"  {category:<20} {count:>4}")
