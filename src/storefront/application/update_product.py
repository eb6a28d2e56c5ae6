"""Application service: Update Product use case."""

from __future__ import annotations

from storefront.application.authorization import require_admin
from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.model.principal import Principal
from storefront.domain.model.product import Product, ProductStatus
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.product_repository import ProductRepository


class UpdateProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(
        self,
        principal: Principal | None,
        product_id: str,
        new_price: str | None = None,
        cost_price: str | None = None,
        publish: bool | None = None,
    ) -> Product:
        """Update a product's prices or visibility.

        This does NOT affect any existing orders — they captured a
        price snapshot at creation time.  Only the fields given are
        written, so a review landing meanwhile keeps its rating.
        """
        require_admin(principal)
        price = Money.of(new_price) if new_price is not None else None
        cost = Money.of(cost_price) if cost_price is not None else None

        def change(product: Product) -> None:
            if price is not None:
                product.update_price(price)
            if cost is not None:
                product.cost_price = cost
            if publish is not None:
                product.status = ProductStatus.PUBLISHED if publish else ProductStatus.DRAFT

        product = self._product_repo.modify(product_id, change)
        if product is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")
        return product
