"""Integration tests for the CheckoutCart use case."""

import pytest

from stockledger.application.checkout_cart import CheckoutCartHandler
from stockledger.application.dto import CartItemSpec
from stockledger.domain.exceptions import (
    InsufficientStockError,
    ProductNotFoundError,
    ReservationFailedError,
    ValidationError,
)
from stockledger.domain.model.movement import MovementKind
from stockledger.domain.model.product import Product
from stockledger.domain.model.value_objects import Money
from stockledger.domain.service.cart_service import CartService
from stockledger.domain.service.stock_ledger_service import StockLedgerService
from stockledger.infrastructure.persistence.in_memory_cart_repository import (
    InMemoryCartRepository,
)
from tests.fakes import FakeMovementRepository, FakeProductRepository


def _setup():
    products = FakeProductRepository([
        Product(id="1", name="Soft Red", price=Money.of("50.00"), stock_quantity=10),
        Product(
            id="2",
            name="Dry White",
            price=Money.of("80.00"),
            promotional_price=Money.of("75.00"),
            stock_quantity=5,
        ),
    ])
    movements = FakeMovementRepository()
    ledger = StockLedgerService(products, movements)
    handler = CheckoutCartHandler(CartService(ledger, products, InMemoryCartRepository()))
    return handler, ledger, products, movements


class TestCheckoutHappyPath:

    def test_checkout_deducts_stock_and_returns_totals(self):
        handler, ledger, products, movements = _setup()

        dto = handler.handle("alice", [CartItemSpec("1", 2), CartItemSpec("2", 1)])

        assert dto.user_id == "alice"
        assert dto.total_items == 3
        assert dto.total_amount == "$175.00"
        assert [i.unit_price for i in dto.items] == ["$50.00", "$75.00"]
        assert products.get_by_id("1").stock_quantity == 8
        assert products.get_by_id("2").stock_quantity == 4
        assert len(movements.list_by_kind(MovementKind.SALE)) == 2
        assert ledger.outstanding_reservations(dto.id) == {}

    def test_repeated_product_is_merged(self):
        handler, _, products, _ = _setup()
        dto = handler.handle("alice", [CartItemSpec("1", 2), CartItemSpec("1", 3)])
        assert len(dto.items) == 1
        assert dto.items[0].quantity == 5
        assert products.get_by_id("1").stock_quantity == 5


class TestCheckoutFailures:

    def test_insufficient_stock_abandons_and_releases(self):
        handler, ledger, products, movements = _setup()

        with pytest.raises(ReservationFailedError, match="Insufficient stock") as exc_info:
            handler.handle("alice", [CartItemSpec("1", 2), CartItemSpec("2", 9)])

        assert isinstance(exc_info.value.__cause__, InsufficientStockError)
        assert products.get_by_id("1").stock_quantity == 10
        assert ledger.reserved_quantity("1") == 0
        assert [m.quantity for m in movements.list_by_kind(MovementKind.RELEASED)] == [-2]

    def test_unknown_product(self):
        handler, *_ = _setup()
        with pytest.raises(ReservationFailedError) as exc_info:
            handler.handle("alice", [CartItemSpec("42", 1)])
        assert isinstance(exc_info.value.__cause__, ProductNotFoundError)

    def test_empty_request_rejected(self):
        handler, *_ = _setup()
        with pytest.raises(ValidationError, match="at least one item"):
            handler.handle("alice", [])
