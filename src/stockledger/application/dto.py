"""Frozen records handed from the application handlers to the CLI.

Money is already formatted and timestamps are strings, so the CLI never
imports a domain type.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CartItemSpec:
    """Input: what the shopper asked for (product ID + quantity)."""

    product_id: str
    quantity: int


@dataclass(frozen=True)
class CartLineDTO:
    product_name: str
    quantity: int
    unit_price: str  # formatted, e.g. "$50.00"
    subtotal: str


@dataclass(frozen=True)
class CartDTO:
    id: str
    user_id: str
    items: list[CartLineDTO]
    total_items: int
    total_amount: str


@dataclass(frozen=True)
class StockLineDTO:
    """One product's stock position: on hand, held, and free to reserve."""

    product_id: str
    product_name: str
    on_hand: int
    reserved: int
    available: int


@dataclass(frozen=True)
class MovementDTO:
    id: int
    product_id: str
    quantity: int
    kind: str
    reason: str
    user_id: str
    timestamp: str


@dataclass(frozen=True)
class InventoryReportDTO:
    total_products: int
    total_items: int
    out_of_stock_products: int
    low_stock_products: int
    inventory_value: str
    generated_at: str


@dataclass(frozen=True)
class StockStatusDTO:
    """Product names per stock band."""

    out_of_stock: list[str]
    low_stock: list[str]
    healthy_stock: list[str]
