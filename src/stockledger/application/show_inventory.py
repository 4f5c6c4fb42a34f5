"""Application service: Show Inventory use case (query).

Reserved quantities are not stored on the product; they are folded from
the ledger for each line.
"""

from __future__ import annotations

from stockledger.application.dto import StockLineDTO
from stockledger.domain.repository.product_repository import ProductRepository
from stockledger.domain.service.stock_ledger_service import StockLedgerService


class ShowInventoryHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        ledger: StockLedgerService,
    ) -> None:
        self._product_repo = product_repo
        self._ledger = ledger

    def handle(self) -> list[StockLineDTO]:
        lines: list[StockLineDTO] = []
        for product in self._product_repo.list_all():
            reserved = self._ledger.reserved_quantity(product.id)
            lines.append(
                StockLineDTO(
                    product_id=product.id,
                    product_name=product.name,
                    on_hand=product.stock_quantity,
                    reserved=reserved,
                    available=max(product.stock_quantity - reserved, 0),
                )
            )
        return lines
