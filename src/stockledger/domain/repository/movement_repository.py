"""Abstract repository for the append-only movement ledger."""

from __future__ import annotations

from abc import ABC, abstractmethod

from stockledger.domain.model.movement import Movement, MovementKind


class MovementRepository(ABC):

    @abstractmethod
    def append(self, movement: Movement) -> Movement:
        """Store a movement and return it with its ledger ID assigned.

        IDs are monotonic.  A movement that already carries an ID keeps it.
        """

    @abstractmethod
    def list_by_product(self, product_id: str) -> list[Movement]:
        """Return a product's movements in ledger order."""

    @abstractmethod
    def list_by_kind(self, kind: MovementKind) -> list[Movement]:
        """Return every movement of one kind in ledger order."""

    @abstractmethod
    def search_reason(self, text: str) -> list[Movement]:
        """Return movements whose reason contains *text*, ignoring case."""

    @abstractmethod
    def list_by_order(self, order_id: str) -> list[Movement]:
        """Return the movements tagged with an order ID in ledger order."""
