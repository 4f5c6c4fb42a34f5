"""Cart aggregate: a shopper's line items for one session.

The cart owns its CartItems.  Line items capture the product name and the
effective unit price at the time they are added, so a cart total does not
move when the catalog price changes later.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from uuid import uuid4

from stockledger.domain.exceptions import InvalidQuantityError, ValidationError
from stockledger.domain.model.product import Product
from stockledger.domain.model.value_objects import Money


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class CartItem:
    id: int
    cart_id: str
    product_id: str
    product_name: str
    unit_price: Money  # snapshot at time of add
    quantity: int
    date_added: datetime = field(default_factory=_now)

    @property
    def subtotal(self) -> Money:
        return self.unit_price * self.quantity


@dataclass
class Cart:
    """Aggregate root for a shopping session.

    The cart id doubles as the order id under which its stock is reserved.
    """

    id: str
    user_id: str
    items: list[CartItem] = field(default_factory=list)
    created_at: datetime = field(default_factory=_now)
    updated_at: datetime = field(default_factory=_now)

    @staticmethod
    def create(user_id: str) -> Cart:
        return Cart(id=str(uuid4()), user_id=user_id)

    # --- Computed properties --------------------------------------------------

    @property
    def total_amount(self) -> Money:
        result = Money.zero()
        for item in self.items:
            result = result + item.subtotal
        return result

    @property
    def total_items(self) -> int:
        return sum(item.quantity for item in self.items)

    @property
    def is_empty(self) -> bool:
        return not self.items

    # --- Mutations ------------------------------------------------------------

    def find_item(self, product_id: str) -> CartItem | None:
        for item in self.items:
            if item.product_id == product_id:
                return item
        return None

    def add_product(self, product: Product, quantity: int) -> CartItem:
        """Merge *quantity* of *product* into the cart.

        An existing line for the product accumulates quantity and keeps its
        original price snapshot; otherwise a new line is appended.
        """
        if quantity <= 0:
            raise InvalidQuantityError("Quantity must be positive")

        item = self.find_item(product.id)
        if item is not None:
            item.quantity += quantity
        else:
            item = CartItem(
                id=max((i.id for i in self.items), default=0) + 1,
                cart_id=self.id,
                product_id=product.id,
                product_name=product.name,
                unit_price=product.effective_price,
                quantity=quantity,
            )
            self.items.append(item)
        self.touch()
        return item

    def set_quantity(self, product_id: str, quantity: int) -> None:
        item = self.find_item(product_id)
        if item is None:
            raise ValidationError(f"Product ID '{product_id}' not found in this cart")
        if quantity <= 0:
            raise InvalidQuantityError("Quantity must be positive")
        item.quantity = quantity
        self.touch()

    def remove_item(self, product_id: str) -> CartItem | None:
        item = self.find_item(product_id)
        if item is None:
            return None
        self.items.remove(item)
        self.touch()
        return item

    def clear(self) -> None:
        self.items.clear()
        self.touch()

    def touch(self) -> None:
        self.updated_at = _now()
