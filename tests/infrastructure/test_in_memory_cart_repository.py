"""Tests for the process-local cart store."""

from stockledger.domain.model.cart import Cart
from stockledger.domain.model.product import Product
from stockledger.domain.model.value_objects import Money
from stockledger.infrastructure.persistence.in_memory_cart_repository import (
    InMemoryCartRepository,
)


def _filled_cart(user_id: str) -> Cart:
    cart = Cart.create(user_id)
    cart.add_product(Product(id="1", name="Soft Red", price=Money.of("50")), 1)
    return cart


class TestFindActiveOrAdd:

    def test_adds_when_user_has_no_active_cart(self):
        carts = InMemoryCartRepository()
        fresh = Cart.create("alice")

        assert carts.find_active_or_add("alice", fresh) is fresh
        assert carts.get_by_id(fresh.id) is fresh

    def test_returns_existing_non_empty_cart(self):
        carts = InMemoryCartRepository()
        active = _filled_cart("alice")
        carts.save(active)
        fresh = Cart.create("alice")

        assert carts.find_active_or_add("alice", fresh) is active
        assert carts.get_by_id(fresh.id) is None

    def test_empty_cart_is_not_active(self):
        carts = InMemoryCartRepository()
        carts.save(Cart.create("alice"))
        fresh = Cart.create("alice")

        assert carts.find_active_or_add("alice", fresh) is fresh
        assert len(carts.list_all()) == 2

    def test_other_users_carts_are_ignored(self):
        carts = InMemoryCartRepository()
        carts.save(_filled_cart("bob"))
        fresh = Cart.create("alice")

        assert carts.find_active_or_add("alice", fresh) is fresh
        assert carts.find_active_for_user("alice") is None
