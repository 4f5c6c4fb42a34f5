import click

from stockledger.infrastructure.bootstrap import configure_logging
from stockledger.infrastructure.cli.cart_commands import cart_checkout
from stockledger.infrastructure.cli.product_commands import product_add, product_list
from stockledger.infrastructure.cli.report_commands import (
    report_low,
    report_status,
    report_summary,
)
from stockledger.infrastructure.cli.stock_commands import (
    stock_add,
    stock_adjust,
    stock_check,
    stock_complete,
    stock_history,
    stock_release,
    stock_remove,
    stock_reserve,
    stock_return,
    stock_show,
)


@click.group()
@click.option("-v", "--verbose", is_flag=True, default=False, help="Log ledger activity.")
def cli(verbose: bool) -> None:
    """Stock Ledger: inventory reservations and stock movements"""
    configure_logging(verbose)


@cli.group()
def product() -> None:
    """Manage the product catalog."""


@cli.group()
def stock() -> None:
    """Change stock and manage reservations."""


@cli.group()
def report() -> None:
    """Inventory reports."""


@cli.group()
def cart() -> None:
    """Shopping cart sessions."""


# Register subcommands
product.add_command(product_add)
product.add_command(product_list)
stock.add_command(stock_add)
stock.add_command(stock_adjust)
stock.add_command(stock_check)
stock.add_command(stock_complete)
stock.add_command(stock_history)
stock.add_command(stock_release)
stock.add_command(stock_remove)
stock.add_command(stock_reserve)
stock.add_command(stock_return)
stock.add_command(stock_show)
report.add_command(report_low)
report.add_command(report_status)
report.add_command(report_summary)
cart.add_command(cart_checkout)
