"""CLI commands for the Order aggregate."""

from __future__ import annotations

import json
from pathlib import Path

import click

from invoicing.application.create_order import CreateOrderHandler
from invoicing.application.dto import LineItemSpec
from invoicing.application.generate_invoice import GenerateInvoiceHandler
from invoicing.application.quote_order import QuoteOrderHandler
from invoicing.application.reconcile_order import ReconcileOrderHandler
from invoicing.application.show_order import ShowOrderHandler
from invoicing.domain.exceptions import DomainException
from invoicing.domain.model.discount import Discount
from invoicing.infrastructure.bootstrap import (
    customer_repository,
    invoice_renderer,
    order_repository,
    stock_repository,
)


def _load_items(path: Path) -> list[LineItemSpec]:
    """Read a JSON array of order-form items."""
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise click.BadParameter(f"{path} is not valid JSON: {exc}")
    if not isinstance(raw, list):
        raise click.BadParameter(f"{path} must contain a JSON array of items.")
    return [LineItemSpec.from_dict(entry) for entry in raw]


def _parse_discount(raw: str | None) -> Discount | None:
    """'15%' is a percentage, '50000' a flat amount."""
    if not raw:
        return None
    raw = raw.strip()
    if raw.endswith("%"):
        return Discount.percent(raw[:-1])
    return Discount.amount(raw)


def _display_items(items) -> None:
    click.echo(
        f"  {'Product':<28} {'Spec':<14} {'Qty':>10} {'Price':>14} {'Tax':>6} {'Amount':>16}"
    )
    click.echo(f"  {'-'*93}")
    for item in items:
        flag = "  !" if item.degraded else ""
        click.echo(
            f"  {item.product:<28} {item.specification:<14} {item.quantity:>10} "
            f"{item.unit_price:>14} {item.tax:>6} {item.amount:>16}{flag}"
        )
    click.echo(f"  {'-'*93}")


def _display_totals(dto) -> None:
    click.echo(f"  {'Subtotal':<40} {dto.subtotal:>53}")
    click.echo(f"  {'Discount':<40} {dto.discount:>53}")
    click.echo(f"  {'Total':<40} {dto.total:>53}")
    missing = sorted({name for item in dto.items for name in item.missing})
    if missing:
        click.echo(f"  ! incomplete items, missing: {', '.join(missing)}")


def _display_order(dto) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order {dto.order_no}  (#{dto.id})")
    click.echo(f"Customer: {dto.customer_id}")
    click.echo(f"Created:  {dto.created_at}")
    if dto.note:
        click.echo(f"Note:     {dto.note}")
    click.echo()
    _display_items(dto.items)
    _display_totals(dto)


@click.command("create")
@click.option("--customer", "customer_id", required=True, help="Customer ID.")
@click.option(
    "--items",
    "items_path",
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="JSON file with the order items.",
)
@click.option("--discount", default=None, help="Flat amount (50000) or percentage (10%).")
@click.option("--note", default="", help="Free-text note.")
def order_create(customer_id: str, items_path: Path, discount: str | None, note: str) -> None:
    """Create a new sales order."""
    handler = CreateOrderHandler(
        order_repo=order_repository(),
        customer_repo=customer_repository(),
        stock_repo=stock_repository(),
    )

    try:
        dto = handler.handle(
            customer_id=customer_id,
            item_specs=_load_items(items_path),
            discount=_parse_discount(discount),
            note=note,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order {dto.order_no} created")
    click.echo()
    _display_items(dto.items)
    _display_totals(dto)


@click.command("quote")
@click.option(
    "--items",
    "items_path",
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="JSON file with the order items.",
)
@click.option("--discount", default=None, help="Flat amount (50000) or percentage (10%).")
def order_quote(items_path: Path, discount: str | None) -> None:
    """Compute totals for items without saving an order."""
    handler = QuoteOrderHandler(stock_repo=stock_repository())

    try:
        dto = handler.handle(_load_items(items_path), _parse_discount(discount))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_items(dto.items)
    _display_totals(dto)


@click.command("show")
@click.argument("order_no")
def order_show(order_no: str) -> None:
    """Show details of an existing order."""
    handler = ShowOrderHandler(order_repo=order_repository())

    try:
        dto = handler.handle(order_no)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("reconcile")
@click.argument("order_no")
def order_reconcile(order_no: str) -> None:
    """Check the stored total against the current pricing rules."""
    handler = ReconcileOrderHandler(order_repo=order_repository())

    try:
        dto = handler.handle(order_no)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order {dto.order_no} total {dto.total} is consistent.")


@click.command("invoice")
@click.argument("order_no")
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, writable=True, path_type=Path),
    default=None,
    help="PDF file to write (default: <order_no>.pdf).",
)
def order_invoice(order_no: str, output: Path | None) -> None:
    """Render the invoice PDF of an order."""
    handler = GenerateInvoiceHandler(
        order_repo=order_repository(),
        customer_repo=customer_repository(),
        renderer=invoice_renderer(),
    )

    try:
        pdf = handler.handle(order_no)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    output = output or Path(f"{order_no}.pdf")
    output.write_bytes(pdf)
    click.echo(f"Invoice for {order_no} written to {output} ({len(pdf)} bytes)")
