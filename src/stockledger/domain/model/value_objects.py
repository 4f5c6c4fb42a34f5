"""Money and Quantity, the two value types the ledger computes with.

Both are frozen and validate on construction, so a Money below zero or a
Quantity of no units cannot be built.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from functools import total_ordering

from stockledger.domain.exceptions import InvalidQuantityError, ValidationError


@total_ordering
@dataclass(frozen=True)
class Money:
    """A non-negative price or valuation.

    Unit prices, cart totals and the inventory valuation are all Money, so
    floats never enter a total.
    """

    amount: Decimal
    currency: str = "USD"

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            raise ValidationError(
                f"Money amount must be a Decimal, not {type(self.amount).__name__}"
            )
        if self.amount < 0:
            raise ValidationError(f"Money amount cannot be negative ({self.amount})")

    @classmethod
    def of(cls, amount: str | int | Decimal) -> Money:
        """Build USD Money from user input such as ``"49.90"``."""
        try:
            return cls(Decimal(str(amount)))
        except (InvalidOperation, ValueError) as exc:
            raise ValidationError(f"Invalid money amount: {amount!r}") from exc

    @classmethod
    def zero(cls) -> Money:
        return cls(Decimal("0.00"))

    def __add__(self, other: Money) -> Money:
        return Money(self.amount + self._amount_of(other), self.currency)

    def __mul__(self, units: int) -> Money:
        """Price of *units* items; used for line subtotals and stock value."""
        if not isinstance(units, int):
            raise TypeError(f"Money can only be multiplied by an int, not {type(units).__name__}")
        if units < 0:
            raise ValidationError("Cannot multiply Money by a negative quantity")
        return Money(self.amount * units, self.currency)

    def __lt__(self, other: Money) -> bool:
        return self.amount < self._amount_of(other)

    def __str__(self) -> str:
        return f"${self.amount:.2f}"

    def _amount_of(self, other: Money) -> Decimal:
        if other.currency != self.currency:
            raise ValidationError(f"Cannot combine {self.currency} with {other.currency}")
        return other.amount


@dataclass(frozen=True)
class Quantity:
    """A number of units moved by one ledger entry; always at least one."""

    value: int

    def __post_init__(self) -> None:
        # bool is an int subclass; True must not count as one unit.
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise InvalidQuantityError(
                f"Quantity must be an integer, not {type(self.value).__name__}"
            )
        if self.value < 1:
            raise InvalidQuantityError("Quantity must be positive")

    def __int__(self) -> int:
        return self.value
