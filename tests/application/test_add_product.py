"""Integration tests for the AddProduct use case."""

import pytest

from stockledger.application.add_product import AddProductHandler
from stockledger.domain.exceptions import ValidationError
from stockledger.domain.model.movement import MovementKind
from stockledger.domain.model.value_objects import Money
from stockledger.domain.service.stock_ledger_service import StockLedgerService
from tests.fakes import FakeMovementRepository, FakeProductRepository


def _setup():
    products = FakeProductRepository()
    movements = FakeMovementRepository()
    handler = AddProductHandler(products, StockLedgerService(products, movements))
    return handler, products, movements


class TestAddProduct:

    def test_creates_product_with_sequential_id(self):
        handler, products, _ = _setup()

        first = handler.handle("Soft Red", "50.00")
        second = handler.handle("Dry White", "80.00", promotional_price="75.00")

        assert (first.id, second.id) == ("1", "2")
        assert products.get_by_id("2").effective_price == Money.of("75.00")

    def test_initial_stock_goes_through_ledger(self):
        handler, _, movements = _setup()

        product = handler.handle("Soft Red", "50.00", initial_stock=12, user_id="admin")

        assert product.stock_quantity == 12
        [movement] = movements.movements
        assert movement.kind == MovementKind.ADDITION
        assert movement.quantity == 12
        assert movement.reason == "Initial stock"
        assert movement.user_id == "admin"

    def test_no_movement_without_initial_stock(self):
        handler, _, movements = _setup()
        handler.handle("Soft Red", "50.00")
        assert movements.movements == []

    def test_duplicate_name_rejected(self):
        handler, *_ = _setup()
        handler.handle("Soft Red", "50.00")
        with pytest.raises(ValidationError, match="already exists"):
            handler.handle("soft red", "40.00")

    def test_duplicate_check_ignores_surrounding_spaces(self):
        handler, products, _ = _setup()
        handler.handle("Red", "10.00")
        with pytest.raises(ValidationError, match="already exists"):
            handler.handle("  Red ", "10.00")
        assert [p.name for p in products.list_all()] == ["Red"]

    def test_name_is_stored_stripped(self):
        handler, *_ = _setup()
        assert handler.handle("  Red ", "10.00").name == "Red"

    @pytest.mark.parametrize("price", ["0", "0.00"])
    def test_non_positive_price_rejected(self, price):
        handler, *_ = _setup()
        with pytest.raises(ValidationError, match="greater than zero"):
            handler.handle("Soft Red", price)

    def test_blank_name_rejected(self):
        handler, *_ = _setup()
        with pytest.raises(ValidationError, match="name is required"):
            handler.handle("   ", "10.00")

    def test_negative_initial_stock_rejected(self):
        handler, *_ = _setup()
        with pytest.raises(ValidationError, match="cannot be negative"):
            handler.handle("Soft Red", "10.00", initial_stock=-1)
