"""CLI commands for stock changes and reservations."""

from __future__ import annotations

import click

from stockledger.application.change_stock import ChangeStockHandler, StockChange
from stockledger.application.manage_reservation import (
    CompleteOrderHandler,
    ReleaseStockHandler,
    ReserveStockHandler,
)
from stockledger.application.show_history import ShowStockHistoryHandler
from stockledger.application.show_inventory import ShowInventoryHandler
from stockledger.domain.exceptions import DomainException
from stockledger.infrastructure.bootstrap import (
    movement_repository,
    product_repository,
    stock_ledger,
)

_product_option = click.option("--product", "product_id", required=True, help="Product ID.")
_reason_option = click.option("--reason", default="", help="Why the stock changed.")
_user_option = click.option("--user", "user_id", default="admin", help="Who made the change.")


def _change_stock(
    change: StockChange, product_id: str, quantity: int, reason: str, user_id: str
) -> None:
    handler = ChangeStockHandler(stock_ledger())

    try:
        message = handler.handle(change, product_id, quantity, reason, user_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(message)


@click.command("add")
@_product_option
@click.option("--quantity", required=True, type=int, help="Units received.")
@_reason_option
@_user_option
def stock_add(product_id: str, quantity: int, reason: str, user_id: str) -> None:
    """Receive stock for a product."""
    _change_stock(StockChange.ADD, product_id, quantity, reason or "Restock", user_id)


@click.command("remove")
@_product_option
@click.option("--quantity", required=True, type=int, help="Units taken out.")
@_reason_option
@_user_option
def stock_remove(product_id: str, quantity: int, reason: str, user_id: str) -> None:
    """Take stock out of inventory."""
    _change_stock(StockChange.REMOVE, product_id, quantity, reason or "Removal", user_id)


@click.command("return")
@_product_option
@click.option("--quantity", required=True, type=int, help="Units returned.")
@_reason_option
@_user_option
def stock_return(product_id: str, quantity: int, reason: str, user_id: str) -> None:
    """Put returned units back in stock."""
    _change_stock(StockChange.RETURN, product_id, quantity, reason or "Customer return", user_id)


@click.command("adjust")
@_product_option
@click.option("--to", "new_quantity", required=True, type=int, help="Counted units on hand.")
@_reason_option
@_user_option
def stock_adjust(product_id: str, new_quantity: int, reason: str, user_id: str) -> None:
    """Set on-hand stock to a counted total."""
    _change_stock(
        StockChange.ADJUST, product_id, new_quantity, reason or "Manual adjustment", user_id
    )


@click.command("check")
@_product_option
@click.option("--quantity", required=True, type=int, help="Units wanted.")
def stock_check(product_id: str, quantity: int) -> None:
    """Check whether enough stock is on hand."""
    available = stock_ledger().check_availability(product_id, quantity)
    status = "available" if available else "NOT available"
    click.echo(f"{quantity} units of product {product_id}: {status}")


@click.command("show")
def stock_show() -> None:
    """Show on-hand, reserved and free stock per product."""
    products = product_repository()
    handler = ShowInventoryHandler(products, stock_ledger(products))
    lines = handler.handle()

    if not lines:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<6} {'Product':<24} {'On hand':>8} {'Reserved':>10} {'Available':>10}")
    click.echo("-" * 62)
    for line in lines:
        click.echo(
            f"{line.product_id:<6} {line.product_name:<24} {line.on_hand:>8} "
            f"{line.reserved:>10} {line.available:>10}"
        )


@click.command("reserve")
@_product_option
@click.option("--quantity", required=True, type=int, help="Units to hold.")
@click.option("--order", "order_id", required=True, help="Order the hold belongs to.")
def stock_reserve(product_id: str, quantity: int, order_id: str) -> None:
    """Reserve stock for an order without deducting it."""
    handler = ReserveStockHandler(stock_ledger())

    try:
        message = handler.handle(product_id, quantity, order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(message)


@click.command("release")
@click.option("--order", "order_id", required=True, help="Order whose hold to release.")
@click.option("--product", "product_id", default=None, help="Only this product.")
@click.option("--quantity", default=None, type=int, help="Units to release (default: all held).")
def stock_release(order_id: str, product_id: str | None, quantity: int | None) -> None:
    """Release reserved stock back to availability."""
    if quantity is not None and product_id is None:
        raise click.ClickException("--quantity requires --product")

    handler = ReleaseStockHandler(stock_ledger())

    try:
        message = handler.handle(order_id, product_id=product_id, quantity=quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(message)


@click.command("complete")
@click.option("--order", "order_id", required=True, help="Order to complete.")
def stock_complete(order_id: str) -> None:
    """Deduct an order's reserved stock permanently."""
    handler = CompleteOrderHandler(stock_ledger())

    try:
        message = handler.handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(message)


@click.command("history")
@click.option("--product", "product_id", default=None, help="Movements of one product.")
@click.option("--kind", default=None, help="Movements of one kind (e.g. Sale).")
@click.option("--search", default=None, help="Movements whose reason contains this text.")
def stock_history(product_id: str | None, kind: str | None, search: str | None) -> None:
    """Show ledger movements."""
    handler = ShowStockHistoryHandler(movement_repository())

    try:
        movements = handler.handle(product_id=product_id, kind=kind, search=search)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not movements:
        click.echo("No movements found.")
        return

    click.echo(f"{'#':>5} {'When':<24} {'Product':<8} {'Kind':<11} {'Qty':>6}  Reason")
    click.echo("-" * 72)
    for m in movements:
        click.echo(
            f"{m.id:>5} {m.timestamp:<24} {m.product_id:<8} {m.kind:<11} "
            f"{m.quantity:>+6}  {m.reason}"
        )
