"""Application service: Cancel Order use case.

Owners (and admins) may cancel an order while it is still pending.  The
cancellation is saved first and the ordered quantities are then returned
to stock, so a storage failure can leave stock under-counted but never
over-sold.  The save only succeeds while the stored order is still
pending, so two racing cancellations restock once.
"""

from __future__ import annotations

from loguru import logger

from storefront.application.dto import OrderDTO
from storefront.application.mappers import order_to_dto
from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.model.order import OrderStatus
from storefront.domain.model.requester import Requester
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.service.inventory_reservation_service import (
    InventoryReservationService,
)


class CancelOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._order_repo = order_repo
        self._product_repo = product_repo

    def handle(self, order_id: int, requester: Requester) -> OrderDTO:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order #{order_id} not found")

        requester.require_owner_or_admin(order.owner_id, "cancel this order")

        order.cancel()
        # Only the update that still sees a pending order gets to restock.
        self._order_repo.save_transition(order, OrderStatus.PENDING)

        InventoryReservationService(self._product_repo).release_for_order(order)

        logger.info(f"Order #{order.id} cancelled by {requester.user_id}")
        return order_to_dto(order)
