"""Unit tests for the Cart aggregate."""

import pytest

from stockledger.domain.exceptions import InvalidQuantityError, ValidationError
from stockledger.domain.model.cart import Cart, CartItem
from stockledger.domain.model.product import Product
from stockledger.domain.model.value_objects import Money


def _product(pid: str = "1", price: str = "50.00", promo: str | None = None) -> Product:
    return Product(
        id=pid,
        name=f"Wine {pid}",
        price=Money.of(price),
        stock_quantity=10,
        promotional_price=Money.of(promo) if promo else None,
    )


class TestCartTotals:

    def test_total_amount_and_items(self):
        cart = Cart.create("alice")
        cart.items = [
            CartItem(1, cart.id, "1", "Red", Money.of("50"), 2),
            CartItem(2, cart.id, "2", "White", Money.of("75"), 1),
        ]
        assert cart.total_amount == Money.of("175")
        assert cart.total_items == 3
        assert not cart.is_empty

    def test_empty_cart(self):
        cart = Cart.create("alice")
        assert cart.is_empty
        assert cart.total_amount == Money.zero()
        assert cart.total_items == 0

    def test_new_carts_get_distinct_ids(self):
        assert Cart.create("alice").id != Cart.create("alice").id


class TestCartAddProduct:

    def test_new_line_captures_name_and_price(self):
        cart = Cart.create("alice")
        item = cart.add_product(_product("1", "50.00"), 2)
        assert item.id == 1
        assert item.cart_id == cart.id
        assert item.product_name == "Wine 1"
        assert item.unit_price == Money.of("50.00")
        assert item.subtotal == Money.of("100.00")

    def test_promotional_price_captured(self):
        cart = Cart.create("alice")
        item = cart.add_product(_product("1", "50.00", promo="40.00"), 1)
        assert item.unit_price == Money.of("40.00")

    def test_same_product_merges_into_one_line(self):
        cart = Cart.create("alice")
        cart.add_product(_product("1"), 2)
        cart.add_product(_product("1"), 3)
        assert len(cart.items) == 1
        assert cart.items[0].quantity == 5

    def test_price_snapshot_survives_catalog_change(self):
        cart = Cart.create("alice")
        product = _product("1", "50.00")
        cart.add_product(product, 1)
        product.price = Money.of("80.00")
        cart.add_product(product, 1)
        assert cart.items[0].unit_price == Money.of("50.00")
        assert cart.total_amount == Money.of("100.00")

    def test_line_ids_are_unique(self):
        cart = Cart.create("alice")
        cart.add_product(_product("1"), 1)
        cart.add_product(_product("2"), 1)
        cart.remove_item("1")
        item = cart.add_product(_product("3"), 1)
        assert item.id == 3

    def test_non_positive_quantity_rejected(self):
        cart = Cart.create("alice")
        with pytest.raises(InvalidQuantityError):
            cart.add_product(_product("1"), 0)
        assert cart.is_empty


class TestCartMutations:

    def test_set_quantity(self):
        cart = Cart.create("alice")
        cart.add_product(_product("1"), 2)
        cart.set_quantity("1", 7)
        assert cart.items[0].quantity == 7

    def test_set_quantity_unknown_product_rejected(self):
        cart = Cart.create("alice")
        with pytest.raises(ValidationError, match="not found in this cart"):
            cart.set_quantity("9", 1)

    def test_remove_item_returns_line(self):
        cart = Cart.create("alice")
        cart.add_product(_product("1"), 2)
        removed = cart.remove_item("1")
        assert removed is not None and removed.quantity == 2
        assert cart.is_empty

    def test_remove_missing_item_returns_none(self):
        assert Cart.create("alice").remove_item("1") is None

    def test_clear_updates_timestamp(self):
        cart = Cart.create("alice")
        cart.add_product(_product("1"), 2)
        before = cart.updated_at
        cart.clear()
        assert cart.is_empty
        assert cart.updated_at >= before
