"""Integration tests for the ChangeStock use case."""

import pytest

from stockledger.application.change_stock import ChangeStockHandler, StockChange
from stockledger.domain.exceptions import (
    InsufficientStockError,
    InvalidQuantityError,
    ProductNotFoundError,
)
from stockledger.domain.model.movement import MovementKind
from stockledger.domain.model.product import Product
from stockledger.domain.model.value_objects import Money
from stockledger.domain.service.stock_ledger_service import StockLedgerService
from tests.fakes import FakeMovementRepository, FakeProductRepository


def _setup():
    products = FakeProductRepository([
        Product(id="1", name="Soft Red", price=Money.of("50.00"), stock_quantity=9),
    ])
    movements = FakeMovementRepository()
    handler = ChangeStockHandler(StockLedgerService(products, movements))
    return handler, products, movements


class TestChangeStock:

    @pytest.mark.parametrize(
        "change, quantity, expected_stock, expected_kind",
        [
            (StockChange.ADD, 3, 12, MovementKind.ADDITION),
            (StockChange.REMOVE, 4, 5, MovementKind.REMOVAL),
            (StockChange.RETURN, 1, 10, MovementKind.RETURN),
            (StockChange.ADJUST, 20, 20, MovementKind.ADJUSTMENT),
        ],
    )
    def test_each_change_updates_stock_and_ledger(
        self, change, quantity, expected_stock, expected_kind
    ):
        handler, products, movements = _setup()

        message = handler.handle(change, "1", quantity, "reason", "admin")

        assert "Soft Red" in message
        assert products.get_by_id("1").stock_quantity == expected_stock
        assert [m.kind for m in movements.movements] == [expected_kind]

    def test_failure_raises_domain_error(self):
        handler, products, _ = _setup()
        with pytest.raises(InsufficientStockError, match="Insufficient stock"):
            handler.handle(StockChange.REMOVE, "1", 1000, "oops", "admin")
        assert products.get_by_id("1").stock_quantity == 9

    def test_invalid_quantity_raises(self):
        handler, *_ = _setup()
        with pytest.raises(InvalidQuantityError):
            handler.handle(StockChange.ADD, "1", 0, "r", "admin")

    def test_unknown_product_raises(self):
        handler, *_ = _setup()
        with pytest.raises(ProductNotFoundError):
            handler.handle(StockChange.RETURN, "7", 1, "r", "admin")
