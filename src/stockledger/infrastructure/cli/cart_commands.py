"""CLI commands for shopping carts.

Carts are process-local, so a cart session runs inside a single command.
"""

from __future__ import annotations

import click

from stockledger.application.checkout_cart import CheckoutCartHandler
from stockledger.application.dto import CartItemSpec
from stockledger.domain.exceptions import DomainException
from stockledger.infrastructure.bootstrap import cart_service


def _parse_items(raw: str) -> list[CartItemSpec]:
    """Parse '1:2,2:1' (product ID:quantity) into CartItemSpec list."""
    specs: list[CartItemSpec] = []
    for pair in raw.split(","):
        pair = pair.strip()
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid item format '{pair}'. Expected 'ProductID:Quantity'."
            )
        product_id, qty_str = pair.rsplit(":", 1)
        try:
            qty = int(qty_str)
        except ValueError:
            raise click.BadParameter(
                f"Invalid quantity '{qty_str}' for product '{product_id}'."
            )
        specs.append(CartItemSpec(product_id=product_id.strip(), quantity=qty))
    return specs


@click.command("checkout")
@click.option("--user", "user_id", required=True, help="Shopper ID.")
@click.option("--items", required=True, help="Items as 'ProductID:Qty,ProductID:Qty'.")
def cart_checkout(user_id: str, items: str) -> None:
    """Reserve items in a cart and complete the order."""
    specs = _parse_items(items)
    handler = CheckoutCartHandler(cart_service())

    try:
        dto = handler.handle(user_id=user_id, item_specs=specs)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Cart {dto.id} checked out for {dto.user_id}")
    click.echo()
    click.echo(f"  {'Product':<24} {'Qty':>5} {'Price':>10} {'Subtotal':>10}")
    click.echo(f"  {'-'*51}")
    for item in dto.items:
        click.echo(
            f"  {item.product_name:<24} {item.quantity:>5} {item.unit_price:>10} {item.subtotal:>10}"
        )
    click.echo(f"  {'-'*51}")
    click.echo(f"  {'Total (' + str(dto.total_items) + ' items)':<30} {dto.total_amount:>21}")
