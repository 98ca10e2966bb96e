"""
Order API Endpoints.

Checkout, order history and the admin/owner lifecycle operations.
"""

from fastapi import APIRouter, Depends

from storefront.application.cancel_order import CancelOrderHandler
from storefront.application.dto import OrderDTO, OrderStatusPatch
from storefront.application.place_order import PlaceOrderHandler
from storefront.application.show_order import ListOrdersHandler, ShowOrderHandler
from storefront.application.update_order_status import UpdateOrderStatusHandler
from storefront.domain.model.requester import Requester
from storefront.domain.service.pricing_policy import PricingPolicy
from storefront.infrastructure.api.dependencies import (
    get_pricing_policy,
    get_repositories,
    get_requester,
)
from storefront.infrastructure.api.schemas import PlaceOrderRequest, UpdateOrderRequest
from storefront.infrastructure.bootstrap import Repositories

router = APIRouter()


@router.post("", status_code=201)
def place_order(
    body: PlaceOrderRequest,
    requester: Requester = Depends(get_requester),
    repos: Repositories = Depends(get_repositories),
    pricing: PricingPolicy = Depends(get_pricing_policy),
) -> OrderDTO:
    """Check out the caller's cart."""
    handler = PlaceOrderHandler(repos.carts, repos.products, repos.orders, pricing)
    address = body.shipping_address.model_dump() if body.shipping_address else None
    return handler.handle(requester, address, body.payment_method)


@router.get("")
def list_orders(
    requester: Requester = Depends(get_requester),
    repos: Repositories = Depends(get_repositories),
) -> list[OrderDTO]:
    """The caller's orders, newest first."""
    return ListOrdersHandler(repos.orders).handle(requester)


@router.get("/admin/all")
def list_all_orders(
    requester: Requester = Depends(get_requester),
    repos: Repositories = Depends(get_repositories),
) -> list[OrderDTO]:
    """Every order, newest first (admin only)."""
    return ListOrdersHandler(repos.orders).handle_all(requester)


@router.get("/{order_id}")
def get_order(
    order_id: int,
    requester: Requester = Depends(get_requester),
    repos: Repositories = Depends(get_repositories),
) -> OrderDTO:
    """Get one order (owner or admin)."""
    return ShowOrderHandler(repos.orders).handle(order_id, requester)


@router.put("/{order_id}")
def update_order(
    order_id: int,
    body: UpdateOrderRequest,
    requester: Requester = Depends(get_requester),
    repos: Repositories = Depends(get_repositories),
) -> OrderDTO:
    """Update status fields (admin only)."""
    patch = OrderStatusPatch(
        order_status=body.order_status,
        payment_status=body.payment_status,
        tracking_number=body.tracking_number,
    )
    return UpdateOrderStatusHandler(repos.orders, repos.products).handle(
        order_id, patch, requester
    )


@router.delete("/{order_id}")
def cancel_order(
    order_id: int,
    requester: Requester = Depends(get_requester),
    repos: Repositories = Depends(get_repositories),
) -> OrderDTO:
    """Cancel a pending order (owner or admin)."""
    return CancelOrderHandler(repos.orders, repos.products).handle(order_id, requester)
