"""Integration tests for the reservation use cases."""

import pytest

from stockledger.application.manage_reservation import (
    CompleteOrderHandler,
    ReleaseStockHandler,
    ReserveStockHandler,
)
from stockledger.domain.exceptions import InsufficientStockError
from stockledger.domain.model.product import Product
from stockledger.domain.model.value_objects import Money
from stockledger.domain.service.stock_ledger_service import StockLedgerService
from tests.fakes import FakeMovementRepository, FakeProductRepository


def _setup():
    products = FakeProductRepository([
        Product(id="1", name="Soft Red", price=Money.of("50.00"), stock_quantity=10),
        Product(id="2", name="Dry White", price=Money.of("75.00"), stock_quantity=5),
    ])
    ledger = StockLedgerService(products, FakeMovementRepository())
    return ledger, products


class TestReservationFlow:

    def test_reserve_then_complete(self):
        ledger, products = _setup()

        message = ReserveStockHandler(ledger).handle("1", 4, "order-1")
        assert "reserved for order order-1" in message

        CompleteOrderHandler(ledger).handle("order-1")
        assert products.get_by_id("1").stock_quantity == 6

    def test_reserve_failure_raises(self):
        ledger, _ = _setup()
        with pytest.raises(InsufficientStockError):
            ReserveStockHandler(ledger).handle("2", 6, "order-1")

    def test_release_one_product_fully(self):
        ledger, _ = _setup()
        ReserveStockHandler(ledger).handle("1", 4, "order-1")
        ReserveStockHandler(ledger).handle("2", 1, "order-1")

        ReleaseStockHandler(ledger).handle("order-1", product_id="1")

        assert ledger.outstanding_reservations("order-1") == {"2": 1}

    def test_release_partial_quantity(self):
        ledger, _ = _setup()
        ReserveStockHandler(ledger).handle("1", 4, "order-1")

        ReleaseStockHandler(ledger).handle("order-1", product_id="1", quantity=1)

        assert ledger.outstanding_reservations("order-1") == {"1": 3}

    def test_release_whole_order(self):
        ledger, _ = _setup()
        ReserveStockHandler(ledger).handle("1", 4, "order-1")
        ReserveStockHandler(ledger).handle("2", 1, "order-1")

        message = ReleaseStockHandler(ledger).handle("order-1")

        assert "5 reserved units" in message
        assert ledger.outstanding_reservations("order-1") == {}

    def test_release_product_with_nothing_held(self):
        ledger, _ = _setup()
        message = ReleaseStockHandler(ledger).handle("order-1", product_id="1")
        assert "No reserved stock" in message
