"""JSON-file-backed implementation of OrderRepository."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from pathlib import Path

from storefront.domain.exceptions import (
    EntityNotFoundError,
    InvalidStatusTransitionError,
)
from storefront.domain.model.order import (
    Order,
    OrderLineItem,
    OrderPricing,
    OrderStatus,
    PaymentStatus,
)
from storefront.domain.model.value_objects import Money, Quantity, ShippingAddress
from storefront.domain.repository.order_repository import OrderRepository
from storefront.infrastructure.persistence.json_file import JsonFile


class JsonOrderRepository(OrderRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    # --- OrderRepository interface --------------------------------------------

    def get_by_id(self, order_id: int) -> Order | None:
        for raw in self._file.read():
            if raw["id"] == order_id:
                return self._to_domain(raw)
        return None

    def list_by_owner(self, owner_id: str) -> list[Order]:
        orders = [self._to_domain(r) for r in self._file.read() if r["owner_id"] == owner_id]
        return self._newest_first(orders)

    def list_all(self) -> list[Order]:
        return self._newest_first([self._to_domain(r) for r in self._file.read()])

    def save(self, order: Order) -> None:
        with self._file.lock:
            records = self._file.read()

            assigned = False
            if order.id is None:
                order.id = max((r["id"] for r in records), default=0) + 1
                assigned = True

            # Upsert: replace if exists, otherwise append
            for i, raw in enumerate(records):
                if raw["id"] == order.id:
                    records[i] = self._to_raw(order)
                    break
            else:
                records.append(self._to_raw(order))

            try:
                self._file.write(records)
            except Exception:
                if assigned:
                    order.id = None
                raise

    def save_transition(self, order: Order, expected_status: OrderStatus) -> None:
        with self._file.lock:
            records = self._file.read()
            for i, raw in enumerate(records):
                if raw["id"] == order.id:
                    break
            else:
                raise EntityNotFoundError(f"Order #{order.id} not found")

            stored = raw["order_status"]
            if stored != expected_status.value:
                raise InvalidStatusTransitionError(
                    f"Order #{order.id} was updated concurrently; it is now {stored}"
                )
            records[i] = self._to_raw(order)
            self._file.write(records)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _newest_first(orders: list[Order]) -> list[Order]:
        return sorted(orders, key=lambda o: (o.created_at, o.id or 0), reverse=True)

    @staticmethod
    def _to_raw(order: Order) -> dict:
        currency = order.total_price.currency
        return {
            "id": order.id,
            "owner_id": order.owner_id,
            "order_status": order.order_status.value,
            "payment_status": order.payment_status.value,
            "payment_method": order.payment_method,
            "tracking_number": order.tracking_number,
            "shipping_address": order.shipping_address.to_dict(),
            "currency": currency,
            "subtotal": str(order.subtotal.amount),
            "shipping_cost": str(order.shipping_cost.amount),
            "tax": str(order.tax.amount),
            "total_price": str(order.total_price.amount),
            "created_at": order.created_at.isoformat(),
            "updated_at": order.updated_at.isoformat(),
            "items": [
                {
                    "product_id": item.product_id,
                    "product_name": item.product_name,
                    "quantity": item.quantity.value,
                    "unit_price": str(item.unit_price.amount),
                }
                for item in order.items
            ],
        }

    @staticmethod
    def _to_domain(raw: dict) -> Order:
        currency = raw.get("currency", "USD")

        def money(key: str) -> Money:
            return Money(Decimal(raw[key]), currency)

        items = tuple(
            OrderLineItem(
                product_id=i["product_id"],
                product_name=i["product_name"],
                quantity=Quantity(i["quantity"]),
                unit_price=Money(Decimal(i["unit_price"]), currency),
            )
            for i in raw["items"]
        )
        address = raw["shipping_address"]
        return Order(
            id=raw["id"],
            owner_id=raw["owner_id"],
            items=items,
            shipping_address=ShippingAddress(
                name=address["name"],
                street=address["street"],
                city=address["city"],
                postal_code=address["postal_code"],
                country=address["country"],
                state=address.get("state"),
                phone=address.get("phone"),
            ),
            payment_method=raw["payment_method"],
            pricing=OrderPricing(
                subtotal=money("subtotal"),
                shipping_cost=money("shipping_cost"),
                tax=money("tax"),
                total_price=money("total_price"),
            ),
            order_status=OrderStatus(raw["order_status"]),
            payment_status=PaymentStatus(raw["payment_status"]),
            tracking_number=raw.get("tracking_number"),
            created_at=datetime.fromisoformat(raw["created_at"]),
            updated_at=datetime.fromisoformat(raw["updated_at"]),
        )
