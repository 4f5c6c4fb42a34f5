"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.

Configuration:
    STOCKLEDGER_DATA_DIR  directory holding products.json and movements.json
                          (defaults to ``data/`` at the repository root)
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from stockledger.domain.service.cart_service import CartService
from stockledger.domain.service.stock_ledger_service import StockLedgerService
from stockledger.infrastructure.persistence.in_memory_cart_repository import (
    InMemoryCartRepository,
)
from stockledger.infrastructure.persistence.json_movement_repository import (
    JsonMovementRepository,
)
from stockledger.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)

# When installed in editable mode the project root is the repo root.
_DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def data_dir() -> Path:
    configured = os.environ.get("STOCKLEDGER_DATA_DIR")
    return Path(configured) if configured else _DEFAULT_DATA_DIR


def configure_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format=LOG_FORMAT,
    )


def product_repository() -> JsonProductRepository:
    return JsonProductRepository(data_dir() / "products.json")


def movement_repository() -> JsonMovementRepository:
    return JsonMovementRepository(data_dir() / "movements.json")


def stock_ledger(products: JsonProductRepository | None = None) -> StockLedgerService:
    return StockLedgerService(products or product_repository(), movement_repository())


def cart_service() -> CartService:
    """A cart service with a fresh, process-local cart store."""
    products = product_repository()
    ledger = stock_ledger(products)
    return CartService(ledger, products, InMemoryCartRepository())
