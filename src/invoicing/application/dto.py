"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from invoicing.domain.exceptions import ValidationError
from invoicing.domain.model.discount import OrderTotals
from invoicing.domain.model.line_item import LineItem
from invoicing.domain.model.order import Order
from invoicing.domain.model.value_objects import to_decimal
from invoicing.domain.service.pricing import ItemPrice, price_items, total_priced_items
from invoicing.rendering.cells import product_cell, quantity_cell, spec_cell


def _as_int(value) -> int:
    """Whole quantities only; 2.7 is rejected rather than truncated."""
    number = to_decimal(value, "quantity")
    if number is None or number != number.to_integral_value():
        raise ValidationError(f"Invalid quantity: {value!r}")
    return int(number)


@dataclass(frozen=True)
class LineItemSpec:
    """Input: one item as entered on the order form.

    Numeric fields are kept as received (strings or numbers); the handler
    converts and validates them.
    """

    type: str | None
    quantity: int = 1
    price: str | int = "0"
    tax: str | int = "0"
    product: str | None = None
    gsm: str | int | None = None
    width_mm: str | int | None = None
    length_m: str | int | None = None
    weight_kg: str | int | None = None
    stock_id: str | None = None

    @staticmethod
    def from_dict(raw: dict) -> LineItemSpec:
        return LineItemSpec(
            type=raw.get("type"),
            quantity=_as_int(raw.get("quantity", 1)),
            price=raw.get("price", "0"),
            tax=raw.get("tax", "0"),
            product=raw.get("product"),
            gsm=raw.get("gsm"),
            width_mm=raw.get("width_mm"),
            length_m=raw.get("length_m"),
            weight_kg=raw.get("weight_kg"),
            stock_id=raw.get("stock_id"),
        )


@dataclass(frozen=True)
class LineItemDTO:
    """Output: a single line item as displayed to the user."""

    product: str
    specification: str
    quantity: str
    unit_price: str  # formatted, e.g. "Rp 10.000"
    tax: str
    amount: str
    missing: list[str] = field(default_factory=list)

    @property
    def degraded(self) -> bool:
        return bool(self.missing)


@dataclass(frozen=True)
class TotalsDTO:
    """Output: live totals for a set of items (nothing persisted)."""

    items: list[LineItemDTO]
    subtotal: str
    discount: str
    total: str


@dataclass(frozen=True)
class OrderDTO:
    """Output: a complete order as displayed to the user."""

    id: int
    order_no: str
    customer_id: str
    items: list[LineItemDTO]
    subtotal: str
    discount: str
    total: str
    created_at: str
    note: str = ""


# --- Mapping ------------------------------------------------------------------


def item_to_dto(item: LineItem, priced: ItemPrice) -> LineItemDTO:
    return LineItemDTO(
        product=product_cell(item),
        specification=spec_cell(item),
        quantity=quantity_cell(item),
        unit_price=str(item.unit_price),
        tax=f"{item.tax_rate}%",
        amount=str(priced.amount),
        missing=list(priced.missing),
    )


def totals_to_dto(items: list[LineItem], priced: list[ItemPrice], totals: OrderTotals) -> TotalsDTO:
    return TotalsDTO(
        items=[item_to_dto(item, result) for item, result in zip(items, priced)],
        subtotal=str(totals.subtotal),
        discount=str(totals.applied_discount),
        total=str(totals.total),
    )


def order_to_dto(order: Order, log=None, priced: list[ItemPrice] | None = None) -> OrderDTO:
    """Map an order for display; ``priced`` reuses an earlier pricing pass."""
    if priced is None:
        priced = price_items(order.items, log=log)
    totals = total_priced_items(priced, order.discount)
    return OrderDTO(
        id=order.id,  # type: ignore[arg-type]
        order_no=order.order_no,
        customer_id=order.customer_id,
        items=[item_to_dto(item, result) for item, result in zip(order.items, priced)],
        subtotal=str(totals.subtotal),
        discount=str(totals.applied_discount),
        total=str(order.total_amount),
        created_at=order.created_at.strftime("%Y-%m-%d %H:%M UTC"),
        note=order.note,
    )
