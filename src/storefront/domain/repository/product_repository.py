"""Abstract repository for Product aggregate (the catalog gateway).

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (JSON, SQL, in-memory)
live in the infrastructure layer.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable

from storefront.domain.model.product import Product


class ProductRepository(ABC):

    @abstractmethod
    def get_by_id(self, product_id: str) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def get_by_name(self, name: str) -> Product | None:
        """Return a product by its exact name (case-insensitive), or None."""

    @abstractmethod
    def list_all(self, category: str | None = None) -> list[Product]:
        """Return every product, optionally restricted to one category."""

    @abstractmethod
    def save(self, product: Product) -> None:
        """Persist a new or updated product."""

    @abstractmethod
    def modify(self, product_id: str, change: Callable[[Product], None]) -> Product | None:
        """Apply *change* to the stored product and write it back atomically.

        The product is loaded fresh under the store's write lock, so edits
        from different writers to different fields never overwrite each
        other.  Returns the updated product, or None if it does not exist.
        """
