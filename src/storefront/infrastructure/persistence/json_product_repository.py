"""JSON-file-backed implementation of ProductRepository."""

from __future__ import annotations

from decimal import Decimal
from pathlib import Path

from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.product_repository import ProductRepository
from storefront.infrastructure.persistence.json_file import JsonFile


class JsonProductRepository(ProductRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: str) -> Product | None:
        for raw in self._file.read():
            if raw["id"] == product_id:
                return self._to_domain(raw)
        return None

    def get_by_sku(self, sku: str) -> Product | None:
        for raw in self._file.read():
            if raw["sku"].lower() == sku.lower():
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[Product]:
        return [self._to_domain(raw) for raw in self._file.read()]

    def save(self, product: Product) -> None:
        with self._file.lock:
            records = self._file.read()
            for i, raw in enumerate(records):
                if raw["id"] == product.id:
                    updated = self._to_raw(product)
                    # Stock and rating only move through their own methods.
                    for key in ("stock", "rating", "review_count"):
                        updated[key] = raw.get(key, updated[key])
                    records[i] = updated
                    break
            else:
                records.append(self._to_raw(product))
            self._file.write(records)

    def decrement_stock(self, product_id: str, quantity: int) -> bool:
        with self._file.lock:
            records = self._file.read()
            raw = self._find(records, product_id)
            if raw is None or raw["stock"] - quantity < 0:
                return False
            raw["stock"] -= quantity
            self._file.write(records)
            return True

    def increment_stock(self, product_id: str, quantity: int) -> None:
        with self._file.lock:
            records = self._file.read()
            raw = self._find(records, product_id)
            if raw is None:
                return
            raw["stock"] += quantity
            self._file.write(records)

    def update_rating(self, product_id: str, rating: Decimal, review_count: int) -> None:
        with self._file.lock:
            records = self._file.read()
            raw = self._find(records, product_id)
            if raw is None:
                return
            raw["rating"] = str(rating)
            raw["review_count"] = review_count
            self._file.write(records)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _find(records: list[dict], product_id: str) -> dict | None:
        for raw in records:
            if raw["id"] == product_id:
                return raw
        return None

    @staticmethod
    def _to_raw(product: Product) -> dict:
        return {
            "id": product.id,
            "name": product.name,
            "sku": product.sku,
            "price": str(product.price.amount),
            "original_price": (
                str(product.original_price.amount) if product.original_price else None
            ),
            "currency": product.price.currency,
            "stock": product.stock,
            "is_active": product.is_active,
            "rating": str(product.rating),
            "review_count": product.review_count,
        }

    @staticmethod
    def _to_domain(raw: dict) -> Product:
        currency = raw.get("currency", "USD")
        original = raw.get("original_price")
        return Product(
            id=raw["id"],
            name=raw["name"],
            sku=raw["sku"],
            price=Money(Decimal(raw["price"]), currency),
            original_price=Money(Decimal(original), currency) if original else None,
            stock=raw.get("stock", 0),
            is_active=raw.get("is_active", True),
            rating=Decimal(raw.get("rating", "0")),
            review_count=raw.get("review_count", 0),
        )
