"""JSON-file-backed implementation of ProductRepository."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from storefront.domain.model.product import Product, ProductStatus
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.product_repository import ProductRepository
from storefront.infrastructure.persistence.json_file import JsonFile


class JsonProductRepository(ProductRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path, default=[])

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: str) -> Product | None:
        products = self._load()
        return products.get(product_id)

    def get_by_name(self, name: str) -> Product | None:
        for product in self._load().values():
            if product.name.lower() == name.lower():
                return product
        return None

    def list_all(self, category: str | None = None) -> list[Product]:
        products = list(self._load().values())
        if category is not None:
            products = [p for p in products if p.category == category.lower()]
        return products

    def save(self, product: Product) -> None:
        with self._file.locked():
            products = self._load()
            products[product.id] = product
            self._persist(products)

    def modify(self, product_id: str, change: Callable[[Product], None]) -> Product | None:
        with self._file.locked():
            products = self._load()
            product = products.get(product_id)
            if product is None:
                return None
            change(product)
            self._persist(products)
            return product

    # --- Serialization helpers ------------------------------------------------

    def raw_snapshot(self) -> list[dict]:
        """The stored records as-is, used by the catalog poller for diffing."""
        return self._file.load()

    def _load(self) -> dict[str, Product]:
        return {item["id"]: self._to_domain(item) for item in self._file.load()}

    @staticmethod
    def _to_domain(item: dict) -> Product:
        mrp = item.get("mrp")
        return Product(
            id=item["id"],
            name=item["name"],
            price=Money(item["price"]),
            category=item.get("category", "general"),
            cost_price=Money(item.get("cost_price", 0)),
            mrp=Money(mrp) if mrp is not None else None,
            stock=item.get("stock", 0),
            status=ProductStatus(item.get("status", "published")),
            description=item.get("description", ""),
            rating=item.get("rating"),
            review_count=item.get("review_count", 0),
        )

    def _persist(self, products: dict[str, Product]) -> None:
        raw = [
            {
                "id": p.id,
                "name": p.name,
                "category": p.category,
                "price": p.price.amount,
                "cost_price": p.cost_price.amount,
                "mrp": p.mrp.amount if p.mrp else None,
                "stock": p.stock,
                "status": p.status.value,
                "description": p.description,
                "rating": p.rating,
                "review_count": p.review_count,
            }
            for p in products.values()
        ]
        self._file.persist(raw)
