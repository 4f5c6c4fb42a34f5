"""Process-local CartRepository.

Carts live only as long as the process.  A dict keyed by cart id, guarded
by a lock so concurrent sessions can share one store.
"""

from __future__ import annotations

import threading

from stockledger.domain.model.cart import Cart
from stockledger.domain.repository.cart_repository import CartRepository


class InMemoryCartRepository(CartRepository):

    def __init__(self) -> None:
        self._carts: dict[str, Cart] = {}
        self._lock = threading.Lock()

    def get_by_id(self, cart_id: str) -> Cart | None:
        with self._lock:
            return self._carts.get(cart_id)

    def find_active_for_user(self, user_id: str) -> Cart | None:
        with self._lock:
            return self._active_for(user_id)

    def find_active_or_add(self, user_id: str, cart: Cart) -> Cart:
        with self._lock:
            existing = self._active_for(user_id)
            if existing is not None:
                return existing
            self._carts[cart.id] = cart
            return cart

    def list_all(self) -> list[Cart]:
        with self._lock:
            return list(self._carts.values())

    def save(self, cart: Cart) -> None:
        with self._lock:
            self._carts[cart.id] = cart

    def _active_for(self, user_id: str) -> Cart | None:
        # Caller holds the lock.
        for cart in self._carts.values():
            if cart.user_id == user_id and not cart.is_empty:
                return cart
        return None
