"""CLI commands for product reviews."""

from __future__ import annotations

import click

from storefront.application.add_review import AddReviewHandler
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import (
    product_repository,
    review_repository,
    session_store,
)


@click.command("add")
@click.option("--product", "product_id", required=True, help="Product ID.")
@click.option("--rating", required=True, type=int, help="1 to 5 stars.")
@click.option("--comment", default="")
def review_add(product_id: str, rating: int, comment: str) -> None:
    """Rate a product."""
    handler = AddReviewHandler(review_repo=review_repository(), product_repo=product_repository())

    try:
        product = handler.handle(session_store().current_principal(), product_id, rating, comment)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(
        f"Thanks! '{product.name}' is now rated {product.rating:.1f} "
        f"from {product.review_count} review(s)."
    )
