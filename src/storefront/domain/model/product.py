"""Product aggregate.

Products live independently of orders. They have their own lifecycle:
prices change, products are published and unpublished.  Orders never
hold a live reference to a Product — they snapshot name and price.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.value_objects import Money


class ProductStatus(Enum):
    DRAFT = "draft"
    PUBLISHED = "published"


@dataclass
class Product:
    """A product in the catalog.

    ``rating`` and ``review_count`` are derived from the product's reviews
    and are only ever written through ``apply_rating()``.
    """

    id: str
    name: str
    price: Money
    category: str = "general"
    cost_price: Money = Money(0)
    mrp: Money | None = None
    stock: int = 0
    status: ProductStatus = ProductStatus.PUBLISHED
    description: str = ""
    rating: float | None = None
    review_count: int = 0

    @property
    def is_available(self) -> bool:
        return self.status == ProductStatus.PUBLISHED

    def update_price(self, new_price: Money) -> None:
        """Change the selling price.

        This does NOT affect any existing orders because orders
        capture a price snapshot at creation time.
        """
        self.price = new_price

    def apply_rating(self, rating: float | None, review_count: int) -> None:
        """Store a freshly recomputed rating summary."""
        if review_count < 0:
            raise ValidationError("Review count cannot be negative")
        if rating is not None and not 1 <= rating <= 5:
            raise ValidationError(f"Rating must be between 1 and 5, got {rating}")
        if (rating is None) != (review_count == 0):
            raise ValidationError("Rating must be present exactly when reviews exist")
        self.rating = rating
        self.review_count = review_count
