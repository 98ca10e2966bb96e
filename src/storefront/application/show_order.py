"""Application service: Show Order and List Orders use cases (queries)."""

from __future__ import annotations

from storefront.application.dto import OrderDTO
from storefront.application.mappers import order_to_dto
from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.model.requester import Requester
from storefront.domain.repository.order_repository import OrderRepository


class ShowOrderHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, order_id: int, requester: Requester) -> OrderDTO:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order #{order_id} not found")
        requester.require_owner_or_admin(order.owner_id, "view this order")
        return order_to_dto(order)


class ListOrdersHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, requester: Requester) -> list[OrderDTO]:
        """The requester's own orders, newest first."""
        return [order_to_dto(o) for o in self._order_repo.list_by_owner(requester.user_id)]

    def handle_all(self, requester: Requester) -> list[OrderDTO]:
        """Every order in the store, newest first (admin only)."""
        requester.require_admin()
        return [order_to_dto(o) for o in self._order_repo.list_all()]
