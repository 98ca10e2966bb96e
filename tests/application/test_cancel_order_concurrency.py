"""Concurrent status changes of one order must restock at most once."""

import threading

import pytest

from storefront.application.cancel_order import CancelOrderHandler
from storefront.application.dto import OrderStatusPatch
from storefront.application.update_order_status import UpdateOrderStatusHandler
from storefront.domain.exceptions import BusinessRuleError, InvalidStatusTransitionError
from storefront.domain.model.order import Order, OrderLineItem, OrderStatus
from storefront.domain.model.product import Product
from storefront.domain.model.requester import Requester
from storefront.domain.model.value_objects import Money, Quantity, ShippingAddress
from storefront.domain.service.pricing_policy import PricingPolicy
from tests.fakes import FakeOrderRepository, FakeProductRepository

ALICE = Requester.customer("alice")
ADMIN = Requester.admin("root")


class SynchronizedOrderRepository(FakeOrderRepository):
    """Lets every reader load the order before any of them saves it."""

    def __init__(self, parties: int) -> None:
        super().__init__()
        self.barrier = threading.Barrier(parties, timeout=10)

    def get_by_id(self, order_id):
        order = super().get_by_id(order_id)
        self.barrier.wait()
        return order

    def stored(self, order_id):
        return super().get_by_id(order_id)


def _setup() -> tuple[SynchronizedOrderRepository, FakeProductRepository, int]:
    """A pending order for 6 x Widget; stock already went from 10 to 4."""
    products = FakeProductRepository(
        [Product(id="1", name="Widget", sku="W-1", price=Money.of("20.00"), stock=4)]
    )
    orders = SynchronizedOrderRepository(parties=2)
    lines = [
        OrderLineItem(
            product_id="1",
            product_name="Widget",
            quantity=Quantity(6),
            unit_price=Money.of("20.00"),
        )
    ]
    order = Order.place(
        owner_id="alice",
        items=lines,
        shipping_address=ShippingAddress("Alice", "1 Main St", "Springfield", "62701", "US"),
        payment_method="mock",
        pricing=PricingPolicy().price(lines),
    )
    orders.save(order)
    return orders, products, order.id


def _run_together(*calls) -> tuple[list[object], list[Exception]]:
    results: list[object] = []
    errors: list[Exception] = []

    def run(call) -> None:
        try:
            results.append(call())
        except BusinessRuleError as exc:
            errors.append(exc)

    threads = [threading.Thread(target=run, args=(c,)) for c in calls]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=10)
    return results, errors


class TestConcurrentCancellation:

    def test_owner_and_admin_cancel_restock_once(self):
        orders, products, order_id = _setup()
        handler = CancelOrderHandler(orders, products)

        results, errors = _run_together(
            lambda: handler.handle(order_id, ALICE),
            lambda: handler.handle(order_id, ADMIN),
        )

        assert len(results) == 1
        assert len(errors) == 1
        assert isinstance(errors[0], InvalidStatusTransitionError)
        assert products.stock_of("1") == 10
        assert orders.stored(order_id).order_status == OrderStatus.CANCELLED

    def test_cancel_and_admin_cancel_patch_restock_once(self):
        orders, products, order_id = _setup()
        cancel = CancelOrderHandler(orders, products)
        update = UpdateOrderStatusHandler(orders, products)

        results, errors = _run_together(
            lambda: cancel.handle(order_id, ALICE),
            lambda: update.handle(order_id, OrderStatusPatch(order_status="cancelled"), ADMIN),
        )

        assert len(results) == 1
        assert len(errors) == 1
        assert products.stock_of("1") == 10

    @pytest.mark.parametrize("target", ["processing", "shipped"])
    def test_cancel_racing_a_forward_move(self, target):
        orders, products, order_id = _setup()
        cancel = CancelOrderHandler(orders, products)
        update = UpdateOrderStatusHandler(orders, products)

        results, errors = _run_together(
            lambda: cancel.handle(order_id, ALICE),
            lambda: update.handle(order_id, OrderStatusPatch(order_status=target), ADMIN),
        )

        assert len(results) == 1
        assert len(errors) == 1
        stored = orders.stored(order_id)
        expected_stock = 10 if stored.order_status == OrderStatus.CANCELLED else 4
        assert products.stock_of("1") == expected_stock
