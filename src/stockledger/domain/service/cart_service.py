"""Domain service: shopping carts on top of the stock ledger.

Coordinates the Cart aggregate, the catalog and the StockLedgerService.
Stock is checked (and, on the reserving paths, reserved) before the cart is
mutated, so a failed reservation always leaves the cart as it was.

The cart id is the order id for reservations.  Every path that drops units
from a cart (removal, clear, abandon, a quantity decrease) releases the
matching hold, and finalizing the cart completes the order.

Operations return a plain bool; the reason for a failure is logged.
"""

from __future__ import annotations

import logging

from stockledger.domain.exceptions import InsufficientStockError, ProductNotFoundError
from stockledger.domain.model.cart import Cart
from stockledger.domain.model.results import InventoryOperationResult
from stockledger.domain.repository.cart_repository import CartRepository
from stockledger.domain.repository.product_repository import ProductRepository
from stockledger.domain.service.stock_ledger_service import StockLedgerService

logger = logging.getLogger(__name__)


class CartService:

    def __init__(
        self,
        ledger: StockLedgerService,
        product_repo: ProductRepository,
        cart_repo: CartRepository,
    ) -> None:
        self._ledger = ledger
        self._product_repo = product_repo
        self._cart_repo = cart_repo

    # --- Lookup ---------------------------------------------------------------

    def get_or_create_cart(self, user_id: str) -> Cart:
        """Return the user's non-empty cart, or start a new one.

        An emptied cart is never reused; the user gets a fresh cart id.
        """
        fresh = Cart.create(user_id)
        cart = self._cart_repo.find_active_or_add(user_id, fresh)
        if cart is fresh:
            logger.debug("Created cart %s for user %s", cart.id, user_id)
        return cart

    def get_cart(self, cart_id: str) -> Cart | None:
        return self._cart_repo.get_by_id(cart_id)

    # --- Adding ---------------------------------------------------------------

    def add_to_cart(self, cart: Cart, product_id: str, quantity: int) -> bool:
        """Add units to the cart after an availability check; no reservation."""
        if quantity <= 0:
            logger.info("Rejected add of %d x %s to cart %s", quantity, product_id, cart.id)
            return False
        if not self._ledger.check_availability(product_id, quantity):
            logger.info("Product %s unavailable for %d units", product_id, quantity)
            return False

        product = self._product_repo.get_by_id(product_id)
        if product is None:
            return False

        cart.add_product(product, quantity)
        self._cart_repo.save(cart)
        return True

    def add_to_cart_with_reservation(
        self, cart: Cart, product_id: str, quantity: int, user_id: str
    ) -> bool:
        """Reserve stock for the cart, then add the units.

        Nothing in the cart changes if either the availability check or
        the reservation fails.  On success the cart is re-owned by *user_id*.
        """
        return self.reserve_and_add(cart, product_id, quantity, user_id).success

    def reserve_and_add(
        self, cart: Cart, product_id: str, quantity: int, user_id: str
    ) -> InventoryOperationResult:
        """Same as ``add_to_cart_with_reservation`` but keeps the failure."""
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            return self._log_failure(
                cart,
                InventoryOperationResult.failed(
                    ProductNotFoundError(f"Product '{product_id}' not found")
                ),
            )

        if not self._ledger.check_availability(product_id, quantity):
            return self._log_failure(
                cart,
                InventoryOperationResult.failed(
                    InsufficientStockError(
                        f"Insufficient stock for {product.name} "
                        f"(requested {quantity}, on hand {product.stock_quantity})"
                    )
                ),
            )

        result = self._ledger.reserve_stock(product_id, quantity, cart.id)
        if not result.success:
            return self._log_failure(cart, result)

        cart.add_product(product, quantity)
        cart.user_id = user_id
        self._cart_repo.save(cart)
        return result

    # --- Changing -------------------------------------------------------------

    def update_item_quantity(
        self, cart: Cart, product_id: str, new_quantity: int
    ) -> bool:
        """Set a line's quantity, reserving or releasing the difference.

        A quantity of zero or less removes the line.
        """
        item = cart.find_item(product_id)
        if item is None:
            return False

        if new_quantity <= 0:
            return self.remove_item(cart, product_id)

        if not self._ledger.check_availability(product_id, new_quantity):
            logger.info("Product %s unavailable for %d units", product_id, new_quantity)
            return False

        difference = new_quantity - item.quantity
        if difference > 0:
            result = self._ledger.reserve_stock(product_id, difference, cart.id)
            if not result.success:
                self._log_failure(cart, result)
                return False
        elif difference < 0:
            self._ledger.release_stock(product_id, -difference, cart.id)

        cart.set_quantity(product_id, new_quantity)
        self._cart_repo.save(cart)
        return True

    def remove_item(self, cart: Cart, product_id: str) -> bool:
        """Drop a line and release what the cart holds of that product."""
        item = cart.remove_item(product_id)
        if item is None:
            return False

        self._ledger.release_stock(product_id, item.quantity, cart.id)
        self._cart_repo.save(cart)
        return True

    def clear_cart(self, cart: Cart) -> None:
        """Empty the cart and release every hold it still has."""
        cart.clear()
        self._ledger.release_order(cart.id)
        self._cart_repo.save(cart)

    # --- Ending a session -----------------------------------------------------

    def finalize_cart(self, cart: Cart) -> bool:
        """Complete the cart's order and empty it.  Fails on an empty cart."""
        if cart.is_empty:
            return False

        result = self._ledger.complete_order(cart.id)
        if not result.success:
            self._log_failure(cart, result)
            return False

        self.clear_cart(cart)
        logger.info("Cart %s finalized for user %s", cart.id, cart.user_id)
        return True

    def abandon_cart(self, cart: Cart) -> bool:
        """Give up on the cart, releasing its holds."""
        if cart.is_empty:
            return True

        self.clear_cart(cart)
        logger.info("Cart %s abandoned", cart.id)
        return True

    @staticmethod
    def _log_failure(cart: Cart, result: InventoryOperationResult) -> InventoryOperationResult:
        logger.info("Cart %s: %s", cart.id, result.message)
        return result
