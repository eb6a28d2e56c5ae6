"""Abstract repository for product reviews."""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.review import Review


class ReviewRepository(ABC):

    @abstractmethod
    def list_for_product(self, product_id: str) -> list[Review]:
        """Return all reviews of a product, oldest first."""

    @abstractmethod
    def add(self, review: Review) -> Review:
        """Append a review and return it with its assigned ID."""
