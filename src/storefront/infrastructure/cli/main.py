import logging

import click

from storefront.infrastructure.bootstrap import settings
from storefront.infrastructure.cli.account_commands import (
    account_login,
    account_logout,
    account_register,
    account_whoami,
)
from storefront.infrastructure.cli.expense_commands import (
    expense_add,
    expense_income,
    expense_list,
)
from storefront.infrastructure.cli.order_commands import (
    order_cancel,
    order_checkout,
    order_list,
    order_proof,
    order_show,
    order_status,
    order_track,
    order_tracking,
)
from storefront.infrastructure.cli.payment_commands import payment_reject, payment_verify
from storefront.infrastructure.cli.product_commands import (
    product_add,
    product_list,
    product_update,
    product_watch,
)
from storefront.infrastructure.cli.report_commands import report_dashboard
from storefront.infrastructure.cli.review_commands import review_add
from storefront.infrastructure.cli.settings_commands import settings_payment, settings_show


@click.group()
@click.option("--log-level", default=None, help="DEBUG, INFO, WARNING or ERROR.")
def cli(log_level: str | None) -> None:
    """Storefront — orders, payment verification and profit tracking"""
    logging.basicConfig(
        level=(log_level or settings().log_level).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@cli.group()
def account() -> None:
    """Register, log in and out."""


@cli.group()
def order() -> None:
    """Place and manage orders."""


@cli.group()
def payment() -> None:
    """Verify or reject customer payments."""


@cli.group()
def product() -> None:
    """Manage products."""


@cli.group()
def expense() -> None:
    """Track expenses and manual income."""


@cli.group()
def review() -> None:
    """Rate products."""


@cli.group()
def report() -> None:
    """Analytics for the admin."""


@cli.group("settings")
def settings_group() -> None:
    """Store payment settings."""


# Register subcommands
account.add_command(account_login)
account.add_command(account_logout)
account.add_command(account_register)
account.add_command(account_whoami)
order.add_command(order_cancel)
order.add_command(order_checkout)
order.add_command(order_list)
order.add_command(order_proof)
order.add_command(order_show)
order.add_command(order_status)
order.add_command(order_track)
order.add_command(order_tracking)
payment.add_command(payment_reject)
payment.add_command(payment_verify)
product.add_command(product_add)
product.add_command(product_list)
product.add_command(product_update)
product.add_command(product_watch)
expense.add_command(expense_add)
expense.add_command(expense_income)
expense.add_command(expense_list)
review.add_command(review_add)
report.add_command(report_dashboard)
settings_group.add_command(settings_payment)
settings_group.add_command(settings_show)
