"""Application service: Show Stock History use case (query)."""

from __future__ import annotations

from stockledger.application.dto import MovementDTO
from stockledger.domain.exceptions import ValidationError
from stockledger.domain.model.movement import Movement, MovementKind
from stockledger.domain.repository.movement_repository import MovementRepository


class ShowStockHistoryHandler:

    def __init__(self, movement_repo: MovementRepository) -> None:
        self._movement_repo = movement_repo

    def handle(
        self,
        product_id: str | None = None,
        kind: str | None = None,
        search: str | None = None,
    ) -> list[MovementDTO]:
        """Return ledger entries selected by exactly one of the filters."""
        given = [f for f in (product_id, kind, search) if f is not None]
        if len(given) != 1:
            raise ValidationError("Specify exactly one of product, kind or search")

        if product_id is not None:
            movements = self._movement_repo.list_by_product(product_id)
        elif kind is not None:
            movements = self._movement_repo.list_by_kind(self._parse_kind(kind))
        else:
            movements = self._movement_repo.search_reason(search)  # type: ignore[arg-type]

        return [self._to_dto(m) for m in movements]

    @staticmethod
    def _parse_kind(raw: str) -> MovementKind:
        for kind in MovementKind:
            if kind.value.lower() == raw.lower():
                return kind
        valid = ", ".join(k.value for k in MovementKind)
        raise ValidationError(f"Unknown movement kind '{raw}' (expected one of {valid})")

    @staticmethod
    def _to_dto(m: Movement) -> MovementDTO:
        return MovementDTO(
            id=m.id,  # type: ignore[arg-type]
            product_id=m.product_id,
            quantity=m.quantity,
            kind=m.kind.value,
            reason=m.reason,
            user_id=m.user_id,
            timestamp=m.timestamp.strftime("%Y-%m-%d %H:%M:%S UTC"),
        )
