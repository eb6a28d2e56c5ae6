"""Application service: Add Review use case.

Appends the review, then rewrites the product's rating summary from the
complete set of its reviews.  Only the rating fields are written back, so
a concurrent price edit survives.
"""

from __future__ import annotations

import logging

from storefront.domain.exceptions import EntityNotFoundError, Unauthorized
from storefront.domain.model.principal import Principal
from storefront.domain.model.product import Product
from storefront.domain.model.review import Review
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.repository.review_repository import ReviewRepository
from storefront.domain.service.review_aggregator import summarize_reviews

logger = logging.getLogger(__name__)


class AddReviewHandler:

    def __init__(self, review_repo: ReviewRepository, product_repo: ProductRepository) -> None:
        self._review_repo = review_repo
        self._product_repo = product_repo

    def handle(
        self,
        principal: Principal | None,
        product_id: str,
        rating: int,
        comment: str = "",
    ) -> Product:
        if principal is None:
            raise Unauthorized("Please login to submit a review")

        if self._product_repo.get_by_id(product_id) is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")

        review = Review.create(
            product_id=product_id,
            user_id=principal.id,
            user_name=principal.display_name,
            rating=rating,
            comment=comment,
        )
        self._review_repo.add(review)

        average, count = summarize_reviews(self._review_repo.list_for_product(product_id))
        product = self._product_repo.modify(
            product_id, lambda stored: stored.apply_rating(average, count)
        )
        logger.info("Product %s rated %s from %d review(s)", product_id, average, count)
        return product
