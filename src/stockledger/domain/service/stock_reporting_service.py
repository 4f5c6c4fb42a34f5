"""Domain service: read-only stock reports over the catalog.

Each report is a fold over a single ``list_all()`` snapshot, so the
figures in one report never mix two catalog states.
"""

from __future__ import annotations

from stockledger.domain.model.product import Product
from stockledger.domain.model.results import InventoryReport, InventoryStatusReport
from stockledger.domain.model.value_objects import Money
from stockledger.domain.repository.product_repository import ProductRepository

DEFAULT_LOW_STOCK_THRESHOLD = 10


class StockReportingService:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def low_stock_products(
        self, threshold: int = DEFAULT_LOW_STOCK_THRESHOLD
    ) -> list[Product]:
        """Products with on-hand stock at or below *threshold* (zero included)."""
        return [p for p in self._product_repo.list_all() if p.stock_quantity <= threshold]

    def generate_inventory_report(self) -> InventoryReport:
        """Summarise the catalog.

        Low stock here always means 1 to DEFAULT_LOW_STOCK_THRESHOLD units,
        and the valuation uses the base price, never the promotional one.
        """
        products = self._product_repo.list_all()

        value = Money.zero()
        for p in products:
            value = value + p.price * p.stock_quantity

        return InventoryReport(
            total_products=len(products),
            total_items=sum(p.stock_quantity for p in products),
            out_of_stock_products=sum(1 for p in products if p.stock_quantity == 0),
            low_stock_products=sum(
                1
                for p in products
                if 0 < p.stock_quantity <= DEFAULT_LOW_STOCK_THRESHOLD
            ),
            inventory_value=value,
        )

    def inventory_status_report(
        self, low_stock_threshold: int = DEFAULT_LOW_STOCK_THRESHOLD
    ) -> InventoryStatusReport:
        """Partition the catalog into out-of-stock, low and healthy stock."""
        out_of_stock: list[Product] = []
        low_stock: list[Product] = []
        healthy_stock: list[Product] = []

        for p in self._product_repo.list_all():
            if p.stock_quantity == 0:
                out_of_stock.append(p)
            elif p.stock_quantity <= low_stock_threshold:
                low_stock.append(p)
            else:
                healthy_stock.append(p)

        return InventoryStatusReport(
            out_of_stock=out_of_stock,
            low_stock=low_stock,
            healthy_stock=healthy_stock,
        )
