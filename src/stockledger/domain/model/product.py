"""Product aggregate.

Products are owned by the catalog. The stock ledger only ever reads the
price and reads/writes ``stock_quantity``; everything else is descriptive
metadata carried for the catalog's benefit.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from stockledger.domain.exceptions import (
    InsufficientStockError,
    InvalidQuantityError,
    ValidationError,
)
from stockledger.domain.model.value_objects import Money


@dataclass
class ProductReview:
    id: int
    user_id: str
    user_name: str
    rating: int  # 1-5 stars
    comment: str = ""
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    is_approved: bool = False

    def __post_init__(self) -> None:
        if not 1 <= self.rating <= 5:
            raise ValidationError("Review rating must be between 1 and 5")


@dataclass
class Product:
    """A product in the catalog.

    Invariant: ``stock_quantity`` is never negative.
    """

    id: str
    name: str
    price: Money
    stock_quantity: int = 0
    promotional_price: Money | None = None
    description: str = ""
    category: str = ""
    product_type: str = ""
    vintage: int | None = None
    region: str = ""
    pairing_notes: str = ""
    rating: float = 0.0
    reviews: list[ProductReview] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.stock_quantity < 0:
            raise ValidationError(
                f"Stock quantity cannot be negative, got {self.stock_quantity}"
            )

    # --- Pricing --------------------------------------------------------------

    @property
    def is_on_sale(self) -> bool:
        return self.promotional_price is not None and self.promotional_price < self.price

    @property
    def effective_price(self) -> Money:
        """The price a shopper pays right now."""
        if self.is_on_sale:
            return self.promotional_price  # type: ignore[return-value]
        return self.price

    # --- Stock ----------------------------------------------------------------

    @property
    def is_available(self) -> bool:
        return self.stock_quantity > 0

    def has_stock_for(self, quantity: int) -> bool:
        return self.stock_quantity >= quantity

    def increase_stock(self, quantity: int) -> None:
        self.stock_quantity += quantity

    def decrease_stock(self, quantity: int) -> None:
        """Deduct *quantity* units, refusing to go below zero."""
        if quantity > self.stock_quantity:
            raise InsufficientStockError(
                f"Insufficient stock for {self.name} "
                f"(requested {quantity}, on hand {self.stock_quantity})"
            )
        self.stock_quantity -= quantity

    def set_stock(self, quantity: int) -> int:
        """Overwrite on-hand stock and return the signed change."""
        if isinstance(quantity, bool) or not isinstance(quantity, int):
            raise InvalidQuantityError(
                f"Stock quantity must be an integer, not {type(quantity).__name__}"
            )
        if quantity < 0:
            raise InvalidQuantityError("Stock quantity cannot be negative")
        delta = quantity - self.stock_quantity
        self.stock_quantity = quantity
        return delta
