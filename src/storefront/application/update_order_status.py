"""Application service: Update Order Status use case (admin).

Applies an ``OrderStatusPatch``: each supplied field is validated with
the same rules used elsewhere, then set.  Unknown status values are a
ValidationError; a status the lifecycle graph does not allow from the
current one is an InvalidStatusTransitionError.  Moving an order into
``cancelled`` returns its quantities to stock.  The save is conditional on the
stored status being the one the update started from, so concurrent
updates of one order are applied one at a time.
"""

from __future__ import annotations

from loguru import logger

from storefront.application.dto import OrderDTO, OrderStatusPatch
from storefront.application.mappers import order_to_dto
from storefront.domain.exceptions import EntityNotFoundError, ValidationError
from storefront.domain.model.order import OrderStatus, PaymentStatus
from storefront.domain.model.requester import Requester
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.service.inventory_reservation_service import (
    InventoryReservationService,
)


class UpdateOrderStatusHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._order_repo = order_repo
        self._product_repo = product_repo

    def handle(
        self,
        order_id: int,
        patch: OrderStatusPatch,
        requester: Requester,
    ) -> OrderDTO:
        requester.require_admin()

        if patch.is_empty:
            raise ValidationError("Nothing to update")

        # Parse everything before touching the order so a bad field
        # leaves it unchanged.
        new_status = (
            OrderStatus.parse(patch.order_status) if patch.order_status is not None else None
        )
        new_payment = (
            PaymentStatus.parse(patch.payment_status)
            if patch.payment_status is not None
            else None
        )
        if patch.tracking_number is not None and not patch.tracking_number.strip():
            raise ValidationError("Tracking number cannot be empty")

        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order #{order_id} not found")

        was_cancelled = order.is_cancelled
        previous = order.order_status

        if new_status is not None:
            order.change_status(new_status)
        if new_payment is not None:
            order.set_payment_status(new_payment)
        if patch.tracking_number is not None:
            order.set_tracking_number(patch.tracking_number)

        self._order_repo.save_transition(order, previous)

        if order.is_cancelled and not was_cancelled:
            InventoryReservationService(self._product_repo).release_for_order(order)

        if order.order_status != previous:
            logger.info(
                f"Order #{order.id} moved from {previous.value} to "
                f"{order.order_status.value} by {requester.user_id}"
            )
        return order_to_dto(order)
