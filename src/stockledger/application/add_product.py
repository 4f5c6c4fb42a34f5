"""Application service: Add Product use case.

New products start at zero stock; any initial quantity is received through
the stock ledger so the ledger explains every unit on hand.
"""

from __future__ import annotations

from stockledger.domain.exceptions import ValidationError
from stockledger.domain.model.product import Product
from stockledger.domain.model.value_objects import Money
from stockledger.domain.repository.product_repository import ProductRepository
from stockledger.domain.service.stock_ledger_service import StockLedgerService


class AddProductHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        ledger: StockLedgerService,
    ) -> None:
        self._product_repo = product_repo
        self._ledger = ledger

    def handle(
        self,
        name: str,
        price: str,
        initial_stock: int = 0,
        promotional_price: str | None = None,
        category: str = "",
        product_type: str = "",
        user_id: str = "system",
    ) -> Product:
        """Add a new product to the catalog."""
        name = (name or "").strip()
        if not name:
            raise ValidationError("Product name is required")
        if initial_stock < 0:
            raise ValidationError("Initial stock cannot be negative")

        if self._product_repo.get_by_name(name) is not None:
            raise ValidationError(f"Product '{name}' already exists")

        base_price = Money.of(price)
        if base_price.amount <= 0:
            raise ValidationError("Product price must be greater than zero")

        product = self._product_repo.create(
            Product(
                id="",
                name=name,
                price=base_price,
                promotional_price=(
                    Money.of(promotional_price) if promotional_price else None
                ),
                category=category,
                product_type=product_type,
            )
        )

        if initial_stock:
            self._ledger.add_stock(
                product.id, initial_stock, "Initial stock", user_id
            ).raise_for_failure()
            product = self._product_repo.get_by_id(product.id) or product

        return product
