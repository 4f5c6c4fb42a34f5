"""Application service: Checkout Cart use case.

Runs a whole shopping session in one call: open a cart for the user,
reserve and add each requested item, then finalize.  If any item cannot be
reserved the cart is abandoned (releasing what was already held) and the
specific reason is raised as a ReservationFailedError.
"""

from __future__ import annotations

from stockledger.application.dto import CartDTO, CartItemSpec, CartLineDTO
from stockledger.domain.exceptions import ReservationFailedError, ValidationError
from stockledger.domain.model.cart import Cart
from stockledger.domain.service.cart_service import CartService


class CheckoutCartHandler:

    def __init__(self, cart_service: CartService) -> None:
        self._cart_service = cart_service

    def handle(self, user_id: str, item_specs: list[CartItemSpec]) -> CartDTO:
        if not item_specs:
            raise ValidationError("Cart must contain at least one item")

        cart = self._cart_service.get_or_create_cart(user_id)

        for spec in item_specs:
            result = self._cart_service.reserve_and_add(
                cart, spec.product_id, spec.quantity, user_id
            )
            if not result.success:
                self._cart_service.abandon_cart(cart)
                raise ReservationFailedError(
                    f"Could not reserve {spec.quantity} of product "
                    f"'{spec.product_id}': {result.message}"
                ) from result.error

        # Snapshot before finalizing; a finalized cart is emptied.
        dto = self._to_dto(cart)

        if not self._cart_service.finalize_cart(cart):
            self._cart_service.abandon_cart(cart)
            raise ValidationError(f"Cart {cart.id} could not be finalized")

        return dto

    @staticmethod
    def _to_dto(cart: Cart) -> CartDTO:
        return CartDTO(
            id=cart.id,
            user_id=cart.user_id,
            items=[
                CartLineDTO(
                    product_name=item.product_name,
                    quantity=item.quantity,
                    unit_price=str(item.unit_price),
                    subtotal=str(item.subtotal),
                )
                for item in cart.items
            ],
            total_items=cart.total_items,
            total_amount=str(cart.total_amount),
        )
