"""Unit tests for the Product aggregate."""

import pytest

from stockledger.domain.exceptions import (
    InsufficientStockError,
    InvalidQuantityError,
    ValidationError,
)
from stockledger.domain.model.product import Product, ProductReview
from stockledger.domain.model.value_objects import Money


def _wine(stock: int = 10, promo: str | None = None) -> Product:
    return Product(
        id="1",
        name="Soft Red",
        price=Money.of("50.00"),
        stock_quantity=stock,
        promotional_price=Money.of(promo) if promo else None,
        category="Red",
        product_type="Soft",
        vintage=2020,
        region="Serra Gaucha",
    )


class TestProductPricing:

    def test_effective_price_is_base_without_promotion(self):
        p = _wine()
        assert not p.is_on_sale
        assert p.effective_price == Money.of("50.00")

    def test_lower_promotional_price_wins(self):
        p = _wine(promo="40.00")
        assert p.is_on_sale
        assert p.effective_price == Money.of("40.00")

    def test_higher_promotional_price_ignored(self):
        p = _wine(promo="60.00")
        assert not p.is_on_sale
        assert p.effective_price == Money.of("50.00")

    def test_equal_promotional_price_is_not_a_sale(self):
        p = _wine(promo="50.00")
        assert not p.is_on_sale


class TestProductStock:

    def test_negative_stock_rejected(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            _wine(stock=-1)

    def test_is_available(self):
        assert _wine(stock=1).is_available
        assert not _wine(stock=0).is_available

    def test_decrease_stock(self):
        p = _wine(stock=10)
        p.decrease_stock(4)
        assert p.stock_quantity == 6

    def test_decrease_below_zero_rejected(self):
        p = _wine(stock=9)
        with pytest.raises(InsufficientStockError, match="Insufficient stock"):
            p.decrease_stock(1000)
        assert p.stock_quantity == 9

    def test_set_stock_returns_signed_delta(self):
        p = _wine(stock=5)
        assert p.set_stock(15) == 10
        assert p.set_stock(3) == -12
        assert p.set_stock(3) == 0
        assert p.stock_quantity == 3

    def test_set_stock_negative_rejected(self):
        p = _wine(stock=5)
        with pytest.raises(InvalidQuantityError):
            p.set_stock(-1)
        assert p.stock_quantity == 5


class TestProductReview:

    def test_rating_out_of_range_rejected(self):
        with pytest.raises(ValidationError, match="between 1 and 5"):
            ProductReview(id=1, user_id="u1", user_name="Ana", rating=6)
