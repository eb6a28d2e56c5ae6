"""Product review written by a signed-in customer."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from storefront.domain.exceptions import ValidationError

MIN_RATING = 1
MAX_RATING = 5


@dataclass(frozen=True)
class Review:

    id: int | None
    product_id: str
    user_id: str
    user_name: str
    rating: int
    comment: str = ""
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @staticmethod
    def create(
        product_id: str,
        user_id: str,
        user_name: str,
        rating: int,
        comment: str = "",
    ) -> Review:
        if isinstance(rating, bool) or not isinstance(rating, int):
            raise ValidationError("Rating must be a whole number", fields=["rating"])
        if not MIN_RATING <= rating <= MAX_RATING:
            raise ValidationError(
                f"Rating must be between {MIN_RATING} and {MAX_RATING}",
                fields=["rating"],
            )
        return Review(
            id=None,
            product_id=product_id,
            user_id=user_id,
            user_name=user_name,
            rating=rating,
            comment=comment.strip(),
        )
