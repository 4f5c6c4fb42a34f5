"""Application services: reserve, release and complete order holds.

Used by operators and integrations that drive reservations directly
rather than through a cart.
"""

from __future__ import annotations

from stockledger.domain.service.stock_ledger_service import StockLedgerService


class ReserveStockHandler:

    def __init__(self, ledger: StockLedgerService) -> None:
        self._ledger = ledger

    def handle(self, product_id: str, quantity: int, order_id: str) -> str:
        result = self._ledger.reserve_stock(product_id, quantity, order_id)
        result.raise_for_failure()
        return result.message


class ReleaseStockHandler:

    def __init__(self, ledger: StockLedgerService) -> None:
        self._ledger = ledger

    def handle(
        self, order_id: str, product_id: str | None = None, quantity: int | None = None
    ) -> str:
        """Release one product's hold, or the whole order when no product is given."""
        if product_id is None:
            result = self._ledger.release_order(order_id)
        else:
            held = self._ledger.outstanding_reservations(order_id).get(product_id, 0)
            result = self._ledger.release_stock(
                product_id, quantity if quantity is not None else max(held, 1), order_id
            )
        result.raise_for_failure()
        return result.message


class CompleteOrderHandler:

    def __init__(self, ledger: StockLedgerService) -> None:
        self._ledger = ledger

    def handle(self, order_id: str) -> str:
        result = self._ledger.complete_order(order_id)
        result.raise_for_failure()
        return result.message
