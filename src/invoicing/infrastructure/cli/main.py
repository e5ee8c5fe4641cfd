import click

from invoicing.domain.exceptions import DomainException
from invoicing.infrastructure.bootstrap import settings
from invoicing.infrastructure.cli.catalog_commands import customer_list, stock_list
from invoicing.infrastructure.cli.order_commands import (
    order_create,
    order_invoice,
    order_quote,
    order_reconcile,
    order_show,
)
from invoicing.infrastructure.log_config import configure_logging


@click.group()
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log at DEBUG level.")
def cli(verbose: bool) -> None:
    """Order pricing and invoicing"""
    try:
        cfg = settings()
    except DomainException as exc:
        raise click.ClickException(str(exc))
    configure_logging("DEBUG" if verbose else cfg.log_level, cfg.log_json)


@cli.group()
def order() -> None:
    """Manage orders."""


@cli.group()
def customer() -> None:
    """Browse customers."""


@cli.group()
def stock() -> None:
    """Browse stock."""


# Register subcommands
order.add_command(order_create)
order.add_command(order_invoice)
order.add_command(order_quote)
order.add_command(order_reconcile)
order.add_command(order_show)
customer.add_command(customer_list)
stock.add_command(stock_list)
