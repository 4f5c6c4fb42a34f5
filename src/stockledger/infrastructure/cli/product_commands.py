"""CLI commands for the product catalog."""

from __future__ import annotations

import click

from stockledger.application.add_product import AddProductHandler
from stockledger.domain.exceptions import DomainException
from stockledger.domain.model.value_objects import Money
from stockledger.infrastructure.bootstrap import product_repository, stock_ledger


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", required=True, help="Base price (e.g. 50.00).")
@click.option("--stock", "initial_stock", default=0, type=int, help="Initial units on hand.")
@click.option("--promo-price", default=None, help="Promotional price, if on sale.")
@click.option("--category", default="", help="Catalog category.")
@click.option("--type", "product_type", default="", help="Product type.")
def product_add(
    name: str,
    price: str,
    initial_stock: int,
    promo_price: str | None,
    category: str,
    product_type: str,
) -> None:
    """Add a new product to the catalog."""
    products = product_repository()
    handler = AddProductHandler(product_repo=products, ledger=stock_ledger(products))

    try:
        product = handler.handle(
            name=name,
            price=price,
            initial_stock=initial_stock,
            promotional_price=promo_price,
            category=category,
            product_type=product_type,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(
        f"Product #{product.id} '{product.name}' added at {product.price} "
        f"with {product.stock_quantity} units"
    )


@click.command("list")
@click.option("--category", default=None, help="Only this category.")
@click.option("--type", "product_type", default=None, help="Only this product type.")
@click.option("--min-price", default=None, help="Lowest base price.")
@click.option("--max-price", default=None, help="Highest base price.")
def product_list(
    category: str | None,
    product_type: str | None,
    min_price: str | None,
    max_price: str | None,
) -> None:
    """List products in the catalog."""
    try:
        products = product_repository().list_filtered(
            category=category,
            min_price=Money.of(min_price) if min_price else None,
            max_price=Money.of(max_price) if max_price else None,
            product_type=product_type,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<6} {'Name':<24} {'Price':>10} {'Stock':>7}")
    click.echo("-" * 50)
    for p in products:
        click.echo(
            f"{p.id:<6} {p.name:<24} {str(p.effective_price):>10} {p.stock_quantity:>7}"
        )
