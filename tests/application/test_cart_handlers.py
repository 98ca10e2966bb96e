"""Integration tests for the cart use cases.

Uses in-memory fake repositories; no file I/O.
"""

import pytest

from storefront.application.add_cart_item import AddCartItemHandler
from storefront.application.remove_cart_item import ClearCartHandler, RemoveCartItemHandler
from storefront.application.show_cart import ShowCartHandler
from storefront.application.update_cart_item import UpdateCartItemHandler
from storefront.domain.exceptions import (
    EntityNotFoundError,
    InsufficientStockError,
    ItemNotFoundError,
    ValidationError,
)
from storefront.domain.model.product import Product
from storefront.domain.model.requester import Requester
from storefront.domain.model.value_objects import Money
from tests.fakes import FakeCartRepository, FakeProductRepository

ALICE = Requester.customer("alice")
BOB = Requester.customer("bob")


def _setup() -> tuple[FakeCartRepository, FakeProductRepository]:
    products = [
        Product(id="1", name="Widget", sku="W-1", price=Money.of("50.00"), stock=10),
        Product(id="2", name="Gadget", sku="G-1", price=Money.of("9.99"), stock=3),
        Product(id="3", name="Retired", sku="R-1", price=Money.of("5.00"), stock=5, is_active=False),
    ]
    return FakeCartRepository(), FakeProductRepository(products)


class TestShowCart:

    def test_missing_cart_is_empty(self):
        carts, _ = _setup()
        dto = ShowCartHandler(carts).handle(ALICE)
        assert dto.items == []
        assert dto.total_price == "0.00"
        assert carts.get_by_owner("alice") is None


class TestAddCartItem:

    def test_creates_cart_on_first_add(self):
        carts, products = _setup()
        dto = AddCartItemHandler(carts, products).handle(ALICE, "1", 2)
        assert dto.owner_id == "alice"
        assert dto.items[0].product_name == "Widget"
        assert dto.items[0].line_total == "100.00"
        assert dto.total_price == "100.00"
        assert carts.get_by_owner("alice") is not None

    def test_merges_existing_line(self):
        carts, products = _setup()
        handler = AddCartItemHandler(carts, products)
        handler.handle(ALICE, "1", 2)
        dto = handler.handle(ALICE, "1", 3)
        assert len(dto.items) == 1
        assert dto.items[0].quantity == 5
        assert dto.item_count == 5

    def test_combined_quantity_checked_against_stock(self):
        carts, products = _setup()
        handler = AddCartItemHandler(carts, products)
        handler.handle(ALICE, "2", 2)
        with pytest.raises(InsufficientStockError):
            handler.handle(ALICE, "2", 2)
        assert carts.get_by_owner("alice").items["2"].quantity.value == 2

    def test_unknown_product(self):
        carts, products = _setup()
        with pytest.raises(EntityNotFoundError):
            AddCartItemHandler(carts, products).handle(ALICE, "99", 1)

    def test_inactive_product_is_not_found(self):
        carts, products = _setup()
        with pytest.raises(EntityNotFoundError):
            AddCartItemHandler(carts, products).handle(ALICE, "3", 1)

    @pytest.mark.parametrize("quantity", [0, -1])
    def test_non_positive_quantity(self, quantity):
        carts, products = _setup()
        with pytest.raises(ValidationError):
            AddCartItemHandler(carts, products).handle(ALICE, "1", quantity)

    def test_carts_are_per_user(self):
        carts, products = _setup()
        AddCartItemHandler(carts, products).handle(ALICE, "1", 1)
        assert ShowCartHandler(carts).handle(BOB).items == []

    def test_re_add_uses_current_price(self):
        carts, products = _setup()
        handler = AddCartItemHandler(carts, products)
        handler.handle(ALICE, "1", 1)
        widget = products.get_by_id("1")
        widget.update_price(Money.of("40.00"))
        products.save(widget)

        dto = handler.handle(ALICE, "1", 1)
        assert dto.items[0].unit_price == "40.00"
        assert dto.total_price == "80.00"


class TestUpdateCartItem:

    def test_sets_quantity(self):
        carts, products = _setup()
        AddCartItemHandler(carts, products).handle(ALICE, "1", 1)
        dto = UpdateCartItemHandler(carts, products).handle(ALICE, "1", 4)
        assert dto.items[0].quantity == 4
        assert dto.total_price == "200.00"

    def test_zero_removes_line(self):
        carts, products = _setup()
        AddCartItemHandler(carts, products).handle(ALICE, "1", 1)
        dto = UpdateCartItemHandler(carts, products).handle(ALICE, "1", 0)
        assert dto.items == []

    def test_exceeding_stock(self):
        carts, products = _setup()
        AddCartItemHandler(carts, products).handle(ALICE, "2", 1)
        with pytest.raises(InsufficientStockError):
            UpdateCartItemHandler(carts, products).handle(ALICE, "2", 4)

    def test_line_not_in_cart(self):
        carts, products = _setup()
        AddCartItemHandler(carts, products).handle(ALICE, "1", 1)
        with pytest.raises(ItemNotFoundError):
            UpdateCartItemHandler(carts, products).handle(ALICE, "2", 1)

    def test_no_cart(self):
        carts, products = _setup()
        with pytest.raises(ItemNotFoundError):
            UpdateCartItemHandler(carts, products).handle(ALICE, "1", 1)

    def test_negative_quantity(self):
        carts, products = _setup()
        AddCartItemHandler(carts, products).handle(ALICE, "1", 1)
        with pytest.raises(ValidationError):
            UpdateCartItemHandler(carts, products).handle(ALICE, "1", -2)


class TestRemoveAndClear:

    def test_remove_line(self):
        carts, products = _setup()
        adder = AddCartItemHandler(carts, products)
        adder.handle(ALICE, "1", 1)
        adder.handle(ALICE, "2", 1)
        dto = RemoveCartItemHandler(carts).handle(ALICE, "1")
        assert [i.product_id for i in dto.items] == ["2"]

    def test_remove_missing_line_is_noop(self):
        carts, products = _setup()
        AddCartItemHandler(carts, products).handle(ALICE, "1", 1)
        dto = RemoveCartItemHandler(carts).handle(ALICE, "2")
        assert len(dto.items) == 1

    def test_remove_without_cart(self):
        carts, _ = _setup()
        assert RemoveCartItemHandler(carts).handle(ALICE, "1").items == []

    def test_clear(self):
        carts, products = _setup()
        AddCartItemHandler(carts, products).handle(ALICE, "1", 1)
        dto = ClearCartHandler(carts).handle(ALICE)
        assert dto.items == []
        assert dto.total_price == "0.00"
        assert carts.get_by_owner("alice").is_empty
