"""Movement: one immutable entry in the stock ledger.

The ledger is append-only.  There is no separate reservation record: a hold
is a RESERVED movement tagged with its order id, and it is settled by later
SALE or RELEASED movements for the same order and product.  What an order
still holds is therefore always derivable by folding its movements.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


class MovementKind(Enum):
    ADDITION = "Addition"
    REMOVAL = "Removal"
    RESERVED = "Reserved"
    SALE = "Sale"
    ADJUSTMENT = "Adjustment"
    RETURN = "Return"
    RELEASED = "Released"


# Kinds that count towards an order's hold on a product.
RESERVATION_KINDS = (MovementKind.RESERVED, MovementKind.SALE, MovementKind.RELEASED)


def reservation_reason(order_id: str) -> str:
    return f"Reservation for order {order_id}"


def sale_reason(order_id: str) -> str:
    return f"Sale confirmed for order {order_id}"


def release_reason(order_id: str) -> str:
    return f"Reservation released for order {order_id}"


@dataclass(frozen=True)
class Movement:
    """A single stock change or hold.

    ``quantity`` is a signed delta: positive for ADDITION, RETURN and
    RESERVED, negative for REMOVAL, SALE and RELEASED, either sign for
    ADJUSTMENT.  ``id`` is None until the ledger assigns one on append.
    """

    product_id: str
    quantity: int
    kind: MovementKind
    reason: str
    user_id: str
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    order_id: str | None = None
    id: int | None = None


def reservation_balances(movements: Iterable[Movement]) -> dict[str, int]:
    """Fold reservation movements into outstanding holds per product.

    RESERVED adds the held quantity, SALE and RELEASED (negative deltas)
    settle it.  Products whose hold is fully settled are left out.
    """
    balances: dict[str, int] = {}
    for movement in movements:
        if movement.kind not in RESERVATION_KINDS:
            continue
        balances[movement.product_id] = (
            balances.get(movement.product_id, 0) + movement.quantity
        )
    return {pid: qty for pid, qty in balances.items() if qty > 0}
