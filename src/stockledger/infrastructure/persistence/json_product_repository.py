"""Catalog stored as a JSON array of products in a single file."""

from __future__ import annotations

import json
import threading
from datetime import datetime
from decimal import Decimal
from pathlib import Path

from stockledger.domain.exceptions import ProductNotFoundError
from stockledger.domain.model.product import Product, ProductReview
from stockledger.domain.model.value_objects import Money
from stockledger.domain.repository.product_repository import (
    ProductRepository,
    matches_filter,
)


class JsonProductRepository(ProductRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._lock = threading.Lock()
        self._ensure_file()

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: str) -> Product | None:
        with self._lock:
            return self._load().get(product_id)

    def get_by_name(self, name: str) -> Product | None:
        with self._lock:
            for product in self._load().values():
                if product.name.lower() == name.lower():
                    return product
        return None

    def list_all(self) -> list[Product]:
        with self._lock:
            return list(self._load().values())

    def list_filtered(
        self,
        category: str | None = None,
        min_price: Money | None = None,
        max_price: Money | None = None,
        product_type: str | None = None,
    ) -> list[Product]:
        return [
            p
            for p in self.list_all()
            if matches_filter(p, category, min_price, max_price, product_type)
        ]

    def create(self, product: Product) -> Product:
        with self._lock:
            products = self._load()
            ids = [int(pid) for pid in products if pid.isdigit()]
            product.id = str(max(ids, default=0) + 1)
            products[product.id] = product
            self._persist(products)
        return product

    def save(self, product: Product) -> None:
        with self._lock:
            products = self._load()
            products[product.id] = product
            self._persist(products)

    def update_stock(self, product_id: str, quantity: int) -> int:
        with self._lock:
            products = self._load()
            product = products.get(product_id)
            if product is None:
                raise ProductNotFoundError(f"Product '{product_id}' not found")
            product.set_stock(quantity)
            self._persist(products)
        return quantity

    def delete(self, product_id: str) -> bool:
        with self._lock:
            products = self._load()
            if products.pop(product_id, None) is None:
                return False
            self._persist(products)
        return True

    # --- Serialization helpers ------------------------------------------------

    @staticmethod
    def _to_raw(p: Product) -> dict:
        return {
            "id": p.id,
            "name": p.name,
            "price": str(p.price.amount),
            "currency": p.price.currency,
            "promotional_price": (
                str(p.promotional_price.amount) if p.promotional_price else None
            ),
            "stock_quantity": p.stock_quantity,
            "description": p.description,
            "category": p.category,
            "product_type": p.product_type,
            "vintage": p.vintage,
            "region": p.region,
            "pairing_notes": p.pairing_notes,
            "rating": p.rating,
            "reviews": [
                {
                    "id": r.id,
                    "user_id": r.user_id,
                    "user_name": r.user_name,
                    "rating": r.rating,
                    "comment": r.comment,
                    "created_at": r.created_at.isoformat(),
                    "is_approved": r.is_approved,
                }
                for r in p.reviews
            ],
        }

    @staticmethod
    def _to_domain(raw: dict) -> Product:
        currency = raw.get("currency", "USD")
        promo = raw.get("promotional_price")
        return Product(
            id=raw["id"],
            name=raw["name"],
            price=Money(Decimal(raw["price"]), currency),
            stock_quantity=raw.get("stock_quantity", 0),
            promotional_price=Money(Decimal(promo), currency) if promo else None,
            description=raw.get("description", ""),
            category=raw.get("category", ""),
            product_type=raw.get("product_type", ""),
            vintage=raw.get("vintage"),
            region=raw.get("region", ""),
            pairing_notes=raw.get("pairing_notes", ""),
            rating=raw.get("rating", 0.0),
            reviews=[
                ProductReview(
                    id=r["id"],
                    user_id=r["user_id"],
                    user_name=r["user_name"],
                    rating=r["rating"],
                    comment=r.get("comment", ""),
                    created_at=datetime.fromisoformat(r["created_at"]),
                    is_approved=r.get("is_approved", False),
                )
                for r in raw.get("reviews", [])
            ],
        )

    # --- File helpers ---------------------------------------------------------

    def _load(self) -> dict[str, Product]:
        raw = json.loads(self._file_path.read_text(encoding="utf-8"))
        return {item["id"]: self._to_domain(item) for item in raw}

    def _persist(self, products: dict[str, Product]) -> None:
        raw = [self._to_raw(p) for p in products.values()]
        self._file_path.write_text(
            json.dumps(raw, indent=2) + "\n", encoding="utf-8"
        )

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")
