"""Value objects returned by stock ledger operations and reports.

None of these are persisted.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from stockledger.domain.exceptions import DomainException
from stockledger.domain.model.product import Product
from stockledger.domain.model.value_objects import Money


@dataclass(frozen=True)
class InventoryOperationResult:
    """Outcome of a stock-mutating operation.

    Callers branch on ``success``.  On failure ``error`` holds the domain
    exception so its kind is not lost.
    """

    success: bool
    message: str
    error: DomainException | None = None

    @staticmethod
    def ok(message: str) -> InventoryOperationResult:
        return InventoryOperationResult(success=True, message=message)

    @staticmethod
    def failed(error: DomainException) -> InventoryOperationResult:
        return InventoryOperationResult(success=False, message=str(error), error=error)

    def raise_for_failure(self) -> None:
        """Re-raise the underlying domain error if the operation failed."""
        if self.error is not None:
            raise self.error


@dataclass(frozen=True)
class InventoryReport:
    total_products: int
    total_items: int
    out_of_stock_products: int
    low_stock_products: int
    inventory_value: Money
    generated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass(frozen=True)
class InventoryStatusReport:
    """The catalog partitioned by on-hand stock.

    The three lists are exhaustive and mutually exclusive.
    """

    out_of_stock: list[Product]
    low_stock: list[Product]
    healthy_stock: list[Product]
