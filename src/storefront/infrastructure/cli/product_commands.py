"""CLI commands for the Product aggregate."""

from __future__ import annotations

import click

from storefront.application.add_product import AddProductHandler
from storefront.application.update_product import UpdateProductHandler
from storefront.domain.exceptions import DomainException
from storefront.domain.service.pricing import discount_percent
from storefront.infrastructure.bootstrap import product_repository, session_store, settings
from storefront.infrastructure.catalog_poller import CatalogPoller


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", required=True, help="Selling price in rupees (e.g. 350).")
@click.option("--category", default="general", show_default=True)
@click.option("--cost-price", default="0", show_default=True, help="Purchase cost per unit.")
@click.option("--mrp", default=None, help="List price, if the product is sold at a discount.")
@click.option("--stock", default=0, type=int, show_default=True)
@click.option("--draft", is_flag=True, default=False, help="Add without publishing.")
@click.option("--description", default="")
def product_add(
    name: str,
    price: str,
    category: str,
    cost_price: str,
    mrp: str | None,
    stock: int,
    draft: bool,
    description: str,
) -> None:
    """Add a new product to the catalog (admin)."""
    handler = AddProductHandler(product_repo=product_repository())

    try:
        product = handler.handle(
            session_store().current_principal(),
            name=name,
            price=price,
            category=category,
            cost_price=cost_price,
            mrp=mrp,
            stock=stock,
            publish=not draft,
            description=description,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product.id} '{product.name}' added at {product.price}")


def _print_products(products) -> None:
    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<6} {'Name':<28} {'Category':<14} {'Price':>10} {'Off':>5} {'Rating':>7}")
    click.echo("-" * 75)
    for p in products:
        off = discount_percent(p.price, p.mrp)
        rating = f"{p.rating:.1f}" if p.rating is not None else "-"
        click.echo(
            f"{p.id:<6} {p.name:<28} {p.category:<14} {str(p.price):>10} "
            f"{(str(off) + '%') if off else '':>5} {rating:>7}"
        )


@click.command("list")
@click.option("--category", default=None, help="Only products in this category.")
def product_list(category: str | None) -> None:
    """List all products in the catalog."""
    _print_products(product_repository().list_all(category))


@click.command("update")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--price", default=None, help="New selling price.")
@click.option("--cost-price", default=None, help="New cost price.")
@click.option("--publish/--unpublish", default=None, help="Show or hide the product.")
def product_update(
    product_id: str, price: str | None, cost_price: str | None, publish: bool | None
) -> None:
    """Update a product's prices or visibility (admin)."""
    handler = UpdateProductHandler(product_repo=product_repository())

    try:
        product = handler.handle(
            session_store().current_principal(),
            product_id=product_id,
            new_price=price,
            cost_price=cost_price,
            publish=publish,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product.id} updated (price {product.price}, {product.status.value})")


@click.command("watch")
@click.option("--interval", type=float, default=None, help="Seconds between polls.")
@click.option("--polls", type=int, default=None, help="Stop after this many polls.")
def product_watch(interval: float | None, polls: int | None) -> None:
    """Re-list the catalog whenever it changes."""
    repo = product_repository()
    poller = CatalogPoller(
        fetch=repo.raw_snapshot,
        on_change=lambda _: _print_products(repo.list_all()),
        interval=interval or settings().poll_interval,
    )
    try:
        poller.run(max_polls=polls)
    except KeyboardInterrupt:
        pass
