"""Domain service: the stock ledger.

Every stock change goes through this service.  Each operation validates,
updates the product in the catalog and appends a Movement to the ledger as
one unit, so the catalog quantity and the ledger never disagree.

Reservations are not stored anywhere except the ledger.  ``reserve_stock``
appends a RESERVED movement tagged with the order id and leaves on-hand
stock alone; ``complete_order`` settles the order's holds with SALE
movements and deducts the stock; ``release_stock`` settles them with
RELEASED movements.  Because settled holds fold to zero, completing or
releasing the same order twice changes nothing.

Mutating operations on the same product are serialized with a per-product
lock.  Reads (availability checks, reports) are not locked.
"""

from __future__ import annotations

import logging
import threading
from collections import defaultdict
from collections.abc import Iterator
from contextlib import ExitStack, contextmanager

from stockledger.domain.exceptions import (
    DomainException,
    InsufficientStockError,
    ProductNotFoundError,
)
from stockledger.domain.model.movement import (
    Movement,
    MovementKind,
    release_reason,
    reservation_balances,
    reservation_reason,
    sale_reason,
)
from stockledger.domain.model.product import Product
from stockledger.domain.model.results import (
    InventoryOperationResult,
    InventoryReport,
    InventoryStatusReport,
)
from stockledger.domain.model.value_objects import Quantity
from stockledger.domain.repository.movement_repository import MovementRepository
from stockledger.domain.repository.product_repository import ProductRepository
from stockledger.domain.service.stock_reporting_service import (
    DEFAULT_LOW_STOCK_THRESHOLD,
    StockReportingService,
)

logger = logging.getLogger(__name__)


class StockLedgerService:

    def __init__(
        self,
        product_repo: ProductRepository,
        movement_repo: MovementRepository,
    ) -> None:
        self._product_repo = product_repo
        self._movement_repo = movement_repo
        self._reports = StockReportingService(product_repo)
        self._locks: dict[str, threading.Lock] = {}
        self._locks_guard = threading.Lock()

    # --- Queries --------------------------------------------------------------

    def check_availability(self, product_id: str, quantity: int) -> bool:
        """True iff the product exists and has at least *quantity* on hand."""
        product = self._product_repo.get_by_id(product_id)
        return product is not None and product.has_stock_for(quantity)

    def outstanding_reservations(self, order_id: str) -> dict[str, int]:
        """Units still held by *order_id*, keyed by product ID."""
        return reservation_balances(self._movement_repo.list_by_order(order_id))

    def reserved_quantity(self, product_id: str) -> int:
        """Units of a product held by all orders that are not yet settled."""
        by_order: dict[str, list[Movement]] = defaultdict(list)
        for movement in self._movement_repo.list_by_product(product_id):
            if movement.order_id is not None:
                by_order[movement.order_id].append(movement)
        return sum(
            reservation_balances(movements).get(product_id, 0)
            for movements in by_order.values()
        )

    def inventory_history(self, product_id: str) -> list[Movement]:
        return self._movement_repo.list_by_product(product_id)

    def low_stock_products(
        self, threshold: int = DEFAULT_LOW_STOCK_THRESHOLD
    ) -> list[Product]:
        return self._reports.low_stock_products(threshold)

    def generate_inventory_report(self) -> InventoryReport:
        return self._reports.generate_inventory_report()

    def inventory_status_report(
        self, low_stock_threshold: int = DEFAULT_LOW_STOCK_THRESHOLD
    ) -> InventoryStatusReport:
        return self._reports.inventory_status_report(low_stock_threshold)

    # --- Direct stock changes -------------------------------------------------

    def add_stock(
        self, product_id: str, quantity: int, reason: str, user_id: str
    ) -> InventoryOperationResult:
        """Receive new stock."""
        try:
            qty = Quantity(quantity).value
            with self._locked(product_id):
                product = self._get_product(product_id)
                product.increase_stock(qty)
                self._product_repo.save(product)
                self._record(product_id, qty, MovementKind.ADDITION, reason, user_id)
        except DomainException as exc:
            return self._failure("add", product_id, exc)
        return InventoryOperationResult.ok(
            f"{qty} units added to stock of {product.name}"
        )

    def remove_stock(
        self, product_id: str, quantity: int, reason: str, user_id: str
    ) -> InventoryOperationResult:
        """Take stock out (damage, loss, manual withdrawal)."""
        try:
            qty = Quantity(quantity).value
            with self._locked(product_id):
                product = self._get_product(product_id)
                product.decrease_stock(qty)
                self._product_repo.save(product)
                self._record(product_id, -qty, MovementKind.REMOVAL, reason, user_id)
        except DomainException as exc:
            return self._failure("remove", product_id, exc)
        return InventoryOperationResult.ok(
            f"{qty} units removed from stock of {product.name}"
        )

    def process_return(
        self, product_id: str, quantity: int, reason: str, user_id: str
    ) -> InventoryOperationResult:
        """Put returned units back on hand."""
        try:
            qty = Quantity(quantity).value
            with self._locked(product_id):
                product = self._get_product(product_id)
                product.increase_stock(qty)
                self._product_repo.save(product)
                self._record(product_id, qty, MovementKind.RETURN, reason, user_id)
        except DomainException as exc:
            return self._failure("return", product_id, exc)
        return InventoryOperationResult.ok(
            f"{qty} units returned to stock of {product.name}"
        )

    def adjust_stock(
        self, product_id: str, new_quantity: int, reason: str, user_id: str
    ) -> InventoryOperationResult:
        """Set on-hand stock to exactly *new_quantity* (stock count correction).

        The ADJUSTMENT movement carries ``new_quantity - previous``, which
        may be zero or negative.
        """
        try:
            with self._locked(product_id):
                product = self._get_product(product_id)
                delta = product.set_stock(new_quantity)
                self._product_repo.save(product)
                self._record(product_id, delta, MovementKind.ADJUSTMENT, reason, user_id)
        except DomainException as exc:
            return self._failure("adjust", product_id, exc)
        direction = "increased" if delta >= 0 else "reduced"
        return InventoryOperationResult.ok(
            f"Stock of {product.name} {direction} to {new_quantity} units"
        )

    # --- Reservations ---------------------------------------------------------

    def reserve_stock(
        self, product_id: str, quantity: int, order_id: str
    ) -> InventoryOperationResult:
        """Hold *quantity* units for *order_id* without touching on-hand stock.

        The hold must fit in what is on hand and not already held by other
        orders (or earlier holds of the same order).
        """
        try:
            qty = Quantity(quantity).value
            with self._locked(product_id):
                product = self._get_product(product_id)
                free = product.stock_quantity - self.reserved_quantity(product_id)
                if qty > free:
                    raise InsufficientStockError(
                        f"Insufficient stock for {product.name} "
                        f"(requested {qty}, {max(free, 0)} not already reserved)"
                    )
                self._record(
                    product_id,
                    qty,
                    MovementKind.RESERVED,
                    reservation_reason(order_id),
                    user_id=order_id,
                    order_id=order_id,
                )
        except DomainException as exc:
            return self._failure("reserve", product_id, exc)
        return InventoryOperationResult.ok(
            f"{qty} units of {product.name} reserved for order {order_id}"
        )

    def complete_order(self, order_id: str) -> InventoryOperationResult:
        """Turn every outstanding hold of *order_id* into a permanent deduction.

        Two phases, as for multi-line reservations:
          Phase 1: validate that every held product still has the units on
                   hand.  Fails before any mutation.
          Phase 2: deduct, persist and append one SALE per product.

        An order with nothing outstanding (never reserved, or already
        completed) succeeds without changing anything.

        Removals and adjustments do not look at holds, so they can take
        on-hand stock below what the order has reserved.  Such an order
        cannot be completed until stock is added back or the hold released.
        """
        held = self.outstanding_reservations(order_id)
        if not held:
            return InventoryOperationResult.ok(
                f"No outstanding reservations for order {order_id}"
            )

        try:
            with self._locked(*held):
                # Re-read under the locks; another caller may have settled some.
                holds = {
                    pid: qty
                    for pid, qty in self.outstanding_reservations(order_id).items()
                    if pid in held
                }

                # Phase 1: load and validate
                to_settle: list[tuple[Product, int]] = []
                for product_id, qty in sorted(holds.items()):
                    product = self._product_repo.get_by_id(product_id)
                    if product is None:
                        logger.warning(
                            "Order %s holds %d of missing product %s; left reserved",
                            order_id, qty, product_id,
                        )
                        continue
                    if not product.has_stock_for(qty):
                        raise InsufficientStockError(
                            f"Insufficient stock for {product.name} to complete "
                            f"order {order_id} (reserved {qty}, "
                            f"on hand {product.stock_quantity})"
                        )
                    to_settle.append((product, qty))

                # Phase 2: mutate and persist
                for product, qty in to_settle:
                    product.decrease_stock(qty)
                    self._product_repo.save(product)
                    self._record(
                        product.id,
                        -qty,
                        MovementKind.SALE,
                        sale_reason(order_id),
                        user_id=order_id,
                        order_id=order_id,
                    )
        except DomainException as exc:
            return self._failure("complete", order_id, exc)
        return InventoryOperationResult.ok(f"Stock updated for order {order_id}")

    def release_stock(
        self, product_id: str, quantity: int, order_id: str
    ) -> InventoryOperationResult:
        """Give back up to *quantity* held units of a product.

        Only what the order actually holds is released; releasing when
        nothing is held succeeds and records nothing.
        """
        try:
            qty = Quantity(quantity).value
            with self._locked(product_id):
                product = self._get_product(product_id)
                held = self.outstanding_reservations(order_id).get(product_id, 0)
                released = min(qty, held)
                if released:
                    self._record(
                        product_id,
                        -released,
                        MovementKind.RELEASED,
                        release_reason(order_id),
                        user_id=order_id,
                        order_id=order_id,
                    )
        except DomainException as exc:
            return self._failure("release", product_id, exc)
        if not released:
            return InventoryOperationResult.ok(
                f"No reserved stock of {product.name} to release for order {order_id}"
            )
        return InventoryOperationResult.ok(
            f"{released} units of {product.name} released from order {order_id}"
        )

    def release_order(self, order_id: str) -> InventoryOperationResult:
        """Release every outstanding hold of *order_id*."""
        held = self.outstanding_reservations(order_id)
        if not held:
            return InventoryOperationResult.ok(
                f"No outstanding reservations for order {order_id}"
            )

        released = 0
        with self._locked(*held):
            for product_id, qty in sorted(self.outstanding_reservations(order_id).items()):
                if product_id not in held:
                    continue
                self._record(
                    product_id,
                    -qty,
                    MovementKind.RELEASED,
                    release_reason(order_id),
                    user_id=order_id,
                    order_id=order_id,
                )
                released += qty
        return InventoryOperationResult.ok(
            f"{released} reserved units released for order {order_id}"
        )

    # --- Internal helpers -----------------------------------------------------

    def _get_product(self, product_id: str) -> Product:
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise ProductNotFoundError(f"Product '{product_id}' not found")
        return product

    def _record(
        self,
        product_id: str,
        quantity: int,
        kind: MovementKind,
        reason: str,
        user_id: str,
        order_id: str | None = None,
    ) -> Movement:
        movement = self._movement_repo.append(
            Movement(
                product_id=product_id,
                quantity=quantity,
                kind=kind,
                reason=reason,
                user_id=user_id,
                order_id=order_id,
            )
        )
        logger.info(
            "Ledger #%s: %s %+d of product %s (%s)",
            movement.id, kind.value, quantity, product_id, reason,
        )
        return movement

    @staticmethod
    def _failure(
        operation: str, subject: str, error: DomainException
    ) -> InventoryOperationResult:
        logger.info("Stock %s failed for %s: %s", operation, subject, error)
        return InventoryOperationResult.failed(error)

    def _lock_for(self, product_id: str) -> threading.Lock:
        with self._locks_guard:
            return self._locks.setdefault(product_id, threading.Lock())

    @contextmanager
    def _locked(self, *product_ids: str) -> Iterator[None]:
        """Hold the locks of every given product, taken in sorted ID order."""
        with ExitStack() as stack:
            for product_id in sorted(set(product_ids)):
                stack.enter_context(self._lock_for(product_id))
            yield
