"""Application services: inventory summary and stock status reports (queries)."""

from __future__ import annotations

from stockledger.application.dto import InventoryReportDTO, StockStatusDTO
from stockledger.domain.service.stock_ledger_service import StockLedgerService
from stockledger.domain.service.stock_reporting_service import (
    DEFAULT_LOW_STOCK_THRESHOLD,
)


class ShowInventoryReportHandler:

    def __init__(self, ledger: StockLedgerService) -> None:
        self._ledger = ledger

    def handle(self) -> InventoryReportDTO:
        report = self._ledger.generate_inventory_report()
        return InventoryReportDTO(
            total_products=report.total_products,
            total_items=report.total_items,
            out_of_stock_products=report.out_of_stock_products,
            low_stock_products=report.low_stock_products,
            inventory_value=str(report.inventory_value),
            generated_at=report.generated_at.strftime("%Y-%m-%d %H:%M UTC"),
        )


class ShowStockStatusHandler:

    def __init__(self, ledger: StockLedgerService) -> None:
        self._ledger = ledger

    def handle(self, low_stock_threshold: int = DEFAULT_LOW_STOCK_THRESHOLD) -> StockStatusDTO:
        status = self._ledger.inventory_status_report(low_stock_threshold)
        return StockStatusDTO(
            out_of_stock=[p.name for p in status.out_of_stock],
            low_stock=[f"{p.name} ({p.stock_quantity})" for p in status.low_stock],
            healthy_stock=[p.name for p in status.healthy_stock],
        )
