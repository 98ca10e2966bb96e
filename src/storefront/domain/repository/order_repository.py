"""Abstract repository for Order aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.order import Order, OrderStatus


class OrderRepository(ABC):

    @abstractmethod
    def get_by_id(self, order_id: int) -> Order | None:
        """Return an order by its ID, or None if not found."""

    @abstractmethod
    def list_by_owner(self, owner_id: str) -> list[Order]:
        """Return the owner's orders, newest first."""

    @abstractmethod
    def list_all(self) -> list[Order]:
        """Return every order, newest first."""

    @abstractmethod
    def save(self, order: Order) -> None:
        """Persist a new or updated order, assigning an ID to new ones."""

    @abstractmethod
    def save_transition(self, order: Order, expected_status: OrderStatus) -> None:
        """Persist an existing order only if its stored status is still *expected_status*.

        The check and the write happen atomically, so of two concurrent
        updates made from the same stored state only the first one lands.
        Raises InvalidStatusTransitionError when the stored status has
        moved, EntityNotFoundError when the order is gone.
        """
