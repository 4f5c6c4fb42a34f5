"""Abstract repository for Cart sessions."""

from __future__ import annotations

from abc import ABC, abstractmethod

from stockledger.domain.model.cart import Cart


class CartRepository(ABC):

    @abstractmethod
    def get_by_id(self, cart_id: str) -> Cart | None:
        """Return a cart by its ID, or None if not found."""

    @abstractmethod
    def find_active_for_user(self, user_id: str) -> Cart | None:
        """Return a non-empty cart owned by *user_id*, or None."""

    @abstractmethod
    def find_active_or_add(self, user_id: str, cart: Cart) -> Cart:
        """Return the user's non-empty cart, or store and return *cart*.

        The lookup and the insert happen as one step, so two concurrent
        callers for the same user see the same result.
        """

    @abstractmethod
    def list_all(self) -> list[Cart]:
        """Return every cart in the session store."""

    @abstractmethod
    def save(self, cart: Cart) -> None:
        """Persist a new or updated cart."""
