"""JSON-file-backed implementation of ReviewRepository."""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from pathlib import Path

from storefront.domain.model.review import Review
from storefront.domain.repository.review_repository import ReviewRepository
from storefront.infrastructure.persistence.json_file import JsonFile


class JsonReviewRepository(ReviewRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path, default=[])

    def list_for_product(self, product_id: str) -> list[Review]:
        return [
            self._to_domain(raw)
            for raw in self._file.load()
            if raw["product_id"] == product_id
        ]

    def add(self, review: Review) -> Review:
        with self._file.locked():
            records = self._file.load()
            stored = replace(review, id=max((r["id"] for r in records), default=0) + 1)
            records.append(
                {
                    "id": stored.id,
                    "product_id": stored.product_id,
                    "user_id": stored.user_id,
                    "user_name": stored.user_name,
                    "rating": stored.rating,
                    "comment": stored.comment,
                    "created_at": stored.created_at.isoformat(),
                }
            )
            self._file.persist(records)
        return stored

    @staticmethod
    def _to_domain(raw: dict) -> Review:
        return Review(
            id=raw["id"],
            product_id=raw["product_id"],
            user_id=raw["user_id"],
            user_name=raw.get("user_name", ""),
            rating=raw["rating"],
            comment=raw.get("comment", ""),
            created_at=datetime.fromisoformat(raw["created_at"]),
        )
