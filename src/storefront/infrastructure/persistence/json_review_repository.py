"""JSON-file-backed implementation of ReviewRepository."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from storefront.domain.model.review import Review
from storefront.domain.repository.review_repository import ReviewRepository
from storefront.infrastructure.persistence.json_file import JsonFile


class JsonReviewRepository(ReviewRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    # --- ReviewRepository interface -------------------------------------------

    def add_if_absent(self, review: Review) -> bool:
        with self._file.lock:
            records = self._file.read()
            for raw in records:
                if raw["user_id"] == review.user_id and raw["product_id"] == review.product_id:
                    return False
            records.append(self._to_raw(review))
            self._file.write(records)
            return True

    def list_for_product(self, product_id: str) -> list[Review]:
        return [
            self._to_domain(raw)
            for raw in self._file.read()
            if raw["product_id"] == product_id
        ]

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(review: Review) -> dict:
        return {
            "user_id": review.user_id,
            "product_id": review.product_id,
            "rating": review.rating,
            "comment": review.comment,
            "created_at": review.created_at.isoformat(),
        }

    @staticmethod
    def _to_domain(raw: dict) -> Review:
        return Review(
            user_id=raw["user_id"],
            product_id=raw["product_id"],
            rating=raw["rating"],
            comment=raw["comment"],
            created_at=datetime.fromisoformat(raw["created_at"]),
        )
