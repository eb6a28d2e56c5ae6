"""Domain service: product rating aggregation.

The rating is always recomputed from the full set of a product's reviews
rather than updated incrementally, so it can never drift away from the
reviews it summarises.
"""

from __future__ import annotations

from collections.abc import Iterable
from decimal import ROUND_HALF_UP, Decimal

from storefront.domain.model.review import Review


def summarize(ratings: Iterable[int]) -> tuple[float | None, int]:
    """Return ``(average rounded half-up to one decimal, count)``.

    ``(None, 0)`` when there are no ratings.
    """
    values = list(ratings)
    if not values:
        return None, 0
    mean = Decimal(sum(values)) / Decimal(len(values))
    rounded = mean.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
    return float(rounded), len(values)


def summarize_reviews(reviews: Iterable[Review]) -> tuple[float | None, int]:
    return summarize(r.rating for r in reviews)
