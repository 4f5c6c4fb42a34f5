"""Application service: direct stock changes (add, remove, return, adjust)."""

from __future__ import annotations

from enum import Enum

from stockledger.domain.service.stock_ledger_service import StockLedgerService


class StockChange(Enum):
    ADD = "add"
    REMOVE = "remove"
    RETURN = "return"
    ADJUST = "adjust"


class ChangeStockHandler:

    def __init__(self, ledger: StockLedgerService) -> None:
        self._ledger = ledger

    def handle(
        self,
        change: StockChange,
        product_id: str,
        quantity: int,
        reason: str,
        user_id: str,
    ) -> str:
        """Apply one stock change and return the ledger's summary.

        For ADJUST, *quantity* is the new on-hand total.  A failed change
        re-raises the domain error the ledger reported.
        """
        operation = {
            StockChange.ADD: self._ledger.add_stock,
            StockChange.REMOVE: self._ledger.remove_stock,
            StockChange.RETURN: self._ledger.process_return,
            StockChange.ADJUST: self._ledger.adjust_stock,
        }[change]

        result = operation(product_id, quantity, reason, user_id)
        result.raise_for_failure()
        return result.message
