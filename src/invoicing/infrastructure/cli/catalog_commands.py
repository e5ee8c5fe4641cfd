"""CLI commands for customers and stock (read-only listings)."""

from __future__ import annotations

import click

from invoicing.infrastructure.bootstrap import customer_repository, stock_repository
from invoicing.rendering.cells import number


@click.command("list")
def customer_list() -> None:
    """List all customers."""
    customers = customer_repository().list_all()

    if not customers:
        click.echo("No customers found.")
        return

    click.echo(f"{'ID':<10} {'Name':<20} {'Company':<30} {'Phone':<16}")
    click.echo("-" * 79)
    for c in customers:
        click.echo(f"{c.id:<10} {c.name:<20} {c.company or '-':<30} {c.phone or '-':<16}")


@click.command("list")
def stock_list() -> None:
    """List stock records."""
    records = stock_repository().list_all()

    if not records:
        click.echo("No stock found.")
        return

    click.echo(f"{'ID':<10} {'Type':<20} {'GSM':>6} {'Width':>8} {'Weight':>8} {'Length':>8}")
    click.echo("-" * 65)
    for r in records:
        click.echo(
            f"{r.id:<10} {r.product_type.value:<20} {number(r.gsm):>6} "
            f"{number(r.width_mm):>8} {number(r.weight_kg):>8} {number(r.length_m):>8}"
        )
