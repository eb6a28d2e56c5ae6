"""Application service: Add Product use case."""

from __future__ import annotations

from storefront.application.authorization import require_admin
from storefront.domain.exceptions import ValidationError
from storefront.domain.model.principal import Principal
from storefront.domain.model.product import Product, ProductStatus
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.product_repository import ProductRepository


class AddProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(
        self,
        principal: Principal | None,
        name: str,
        price: str,
        category: str = "general",
        cost_price: str = "0",
        mrp: str | None = None,
        stock: int = 0,
        publish: bool = True,
        description: str = "",
    ) -> Product:
        """Add a new product to the catalog."""
        require_admin(principal)
        if not name or not name.strip():
            raise ValidationError("Product name is required", fields=["name"])
        if stock < 0:
            raise ValidationError("Stock cannot be negative", fields=["stock"])

        existing = self._product_repo.get_by_name(name.strip())
        if existing is not None:
            raise ValidationError(f"Product '{name}' already exists", fields=["name"])

        # Auto-assign ID based on existing products
        numeric_ids = [int(p.id) for p in self._product_repo.list_all() if p.id.isdigit()]
        next_id = str(max(numeric_ids, default=0) + 1)

        product = Product(
            id=next_id,
            name=name.strip(),
            price=Money.of(price),
            category=(category.strip().lower() or "general"),
            cost_price=Money.of(cost_price),
            mrp=Money.of(mrp) if mrp else None,
            stock=stock,
            status=ProductStatus.PUBLISHED if publish else ProductStatus.DRAFT,
            description=description.strip(),
        )
        self._product_repo.save(product)
        return product
