"""JSON-file-backed implementation of CartRepository."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from pathlib import Path

from storefront.domain.model.cart import Cart, CartItem
from storefront.domain.model.value_objects import Money, Quantity
from storefront.domain.repository.cart_repository import CartRepository
from storefront.infrastructure.persistence.json_file import JsonFile


class JsonCartRepository(CartRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    # --- CartRepository interface ---------------------------------------------

    def get_by_owner(self, owner_id: str) -> Cart | None:
        for raw in self._file.read():
            if raw["owner_id"] == owner_id:
                return self._to_domain(raw)
        return None

    def save(self, cart: Cart) -> None:
        with self._file.lock:
            records = self._file.read()
            for i, raw in enumerate(records):
                if raw["owner_id"] == cart.owner_id:
                    records[i] = self._to_raw(cart)
                    break
            else:
                records.append(self._to_raw(cart))
            self._file.write(records)

    def take(self, owner_id: str) -> Cart | None:
        with self._file.lock:
            records = self._file.read()
            for raw in records:
                if raw["owner_id"] == owner_id:
                    break
            else:
                return None

            cart = self._to_domain(raw)
            if cart.is_empty:
                return cart
            emptied = self._to_domain(raw)
            emptied.clear()
            raw.update(self._to_raw(emptied))
            self._file.write(records)
            return cart

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(cart: Cart) -> dict:
        # The total is derived from the lines on load, never stored.
        return {
            "owner_id": cart.owner_id,
            "updated_at": cart.updated_at.isoformat(),
            "items": [
                {
                    "product_id": item.product_id,
                    "product_name": item.product_name,
                    "quantity": item.quantity.value,
                    "unit_price": str(item.unit_price.amount),
                    "currency": item.unit_price.currency,
                }
                for item in cart.items.values()
            ],
        }

    @staticmethod
    def _to_domain(raw: dict) -> Cart:
        items = {
            i["product_id"]: CartItem(
                product_id=i["product_id"],
                product_name=i["product_name"],
                quantity=Quantity(i["quantity"]),
                unit_price=Money(Decimal(i["unit_price"]), i.get("currency", "USD")),
            )
            for i in raw["items"]
        }
        return Cart(
            owner_id=raw["owner_id"],
            items=items,
            updated_at=datetime.fromisoformat(raw["updated_at"]),
        )
