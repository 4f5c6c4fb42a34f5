"""CLI commands for inventory reports."""

from __future__ import annotations

import click

from stockledger.application.show_report import (
    ShowInventoryReportHandler,
    ShowStockStatusHandler,
)
from stockledger.domain.service.stock_reporting_service import (
    DEFAULT_LOW_STOCK_THRESHOLD,
)
from stockledger.infrastructure.bootstrap import stock_ledger

_threshold_option = click.option(
    "--threshold",
    default=DEFAULT_LOW_STOCK_THRESHOLD,
    show_default=True,
    type=int,
    help="Highest stock level that counts as low.",
)


@click.command("summary")
def report_summary() -> None:
    """Catalog-wide stock totals and valuation."""
    dto = ShowInventoryReportHandler(stock_ledger()).handle()

    click.echo(f"Inventory report ({dto.generated_at})")
    click.echo(f"  {'Products':<22} {dto.total_products:>10}")
    click.echo(f"  {'Units on hand':<22} {dto.total_items:>10}")
    click.echo(f"  {'Out of stock':<22} {dto.out_of_stock_products:>10}")
    click.echo(f"  {'Low stock (1-10)':<22} {dto.low_stock_products:>10}")
    click.echo(f"  {'Inventory value':<22} {dto.inventory_value:>10}")


@click.command("status")
@_threshold_option
def report_status(threshold: int) -> None:
    """Products grouped by stock band."""
    dto = ShowStockStatusHandler(stock_ledger()).handle(threshold)

    for title, names in (
        ("Out of stock", dto.out_of_stock),
        (f"Low stock (<= {threshold})", dto.low_stock),
        (f"Healthy stock (> {threshold})", dto.healthy_stock),
    ):
        click.echo(f"{title}: {len(names)}")
        for name in names:
            click.echo(f"  - {name}")


@click.command("low")
@_threshold_option
def report_low(threshold: int) -> None:
    """Products at or below the low-stock threshold."""
    products = stock_ledger().low_stock_products(threshold)

    if not products:
        click.echo("No low-stock products.")
        return

    for p in products:
        click.echo(f"{p.id:<6} {p.name:<24} {p.stock_quantity:>6} units")
