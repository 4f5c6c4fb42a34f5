"""JSON-file-backed implementation of MovementRepository.

Movements are only ever appended; existing records are never rewritten.
"""

from __future__ import annotations

import dataclasses
import json
import threading
from datetime import datetime
from pathlib import Path

from stockledger.domain.model.movement import Movement, MovementKind
from stockledger.domain.repository.movement_repository import MovementRepository


class JsonMovementRepository(MovementRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._lock = threading.Lock()
        self._ensure_file()

    # --- MovementRepository interface -----------------------------------------

    def append(self, movement: Movement) -> Movement:
        with self._lock:
            records = self._load_raw()
            if movement.id is None:
                next_id = max((r["id"] for r in records), default=0) + 1
                movement = dataclasses.replace(movement, id=next_id)
            records.append(self._to_raw(movement))
            self._persist_raw(records)
        return movement

    def list_by_product(self, product_id: str) -> list[Movement]:
        return [m for m in self._load() if m.product_id == product_id]

    def list_by_kind(self, kind: MovementKind) -> list[Movement]:
        return [m for m in self._load() if m.kind == kind]

    def search_reason(self, text: str) -> list[Movement]:
        needle = text.casefold()
        return [m for m in self._load() if needle in (m.reason or "").casefold()]

    def list_by_order(self, order_id: str) -> list[Movement]:
        return [m for m in self._load() if m.order_id == order_id]

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(m: Movement) -> dict:
        return {
            "id": m.id,
            "product_id": m.product_id,
            "quantity": m.quantity,
            "kind": m.kind.value,
            "reason": m.reason,
            "user_id": m.user_id,
            "timestamp": m.timestamp.isoformat(),
            "order_id": m.order_id,
        }

    @staticmethod
    def _to_domain(raw: dict) -> Movement:
        return Movement(
            id=raw["id"],
            product_id=raw["product_id"],
            quantity=raw["quantity"],
            kind=MovementKind(raw["kind"]),
            reason=raw.get("reason", ""),
            user_id=raw.get("user_id", ""),
            timestamp=datetime.fromisoformat(raw["timestamp"]),
            order_id=raw.get("order_id"),
        )

    # --- File helpers ---------------------------------------------------------

    def _load(self) -> list[Movement]:
        with self._lock:
            return [self._to_domain(raw) for raw in self._load_raw()]

    def _load_raw(self) -> list[dict]:
        return json.loads(self._file_path.read_text(encoding="utf-8"))

    def _persist_raw(self, records: list[dict]) -> None:
        self._file_path.write_text(
            json.dumps(records, indent=2) + "\n", encoding="utf-8"
        )

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")
