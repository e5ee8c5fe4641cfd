"""JSON (de)serialization of line items shared by the file repositories.

Decimals are stored as strings. Records written before product types were
validated may lack ``type`` or ``quantity``; they load as unclassified
items with a quantity of one.
"""

from __future__ import annotations

from decimal import Decimal

from invoicing.domain.model.line_item import (
    LineItem,
    ProductType,
    Specification,
    SubVariant,
)
from invoicing.domain.model.value_objects import (
    Money,
    Percentage,
    Quantity,
    to_decimal,
)


def _str_or_none(value: Decimal | None) -> str | None:
    return None if value is None else str(value)


def line_item_to_raw(item: LineItem) -> dict:
    spec = item.specification
    return {
        "type": item.product_type.value if item.product_type else item.product_label,
        "product": item.sub_variant.value if item.sub_variant else None,
        "gsm": _str_or_none(spec.gsm),
        "width_mm": _str_or_none(spec.width_mm),
        "length_m": _str_or_none(spec.length_m),
        "weight_kg": _str_or_none(spec.weight_kg),
        "quantity": item.quantity.value,
        "price": str(item.unit_price.amount),
        "currency": item.unit_price.currency,
        "tax": str(item.tax_rate.value),
        "stock_id": item.stock_id,
    }


def line_item_from_raw(raw: dict) -> LineItem:
    label = raw.get("type")
    return LineItem(
        product_type=ProductType.parse(label),
        sub_variant=SubVariant.parse(raw.get("product")),
        specification=Specification(
            gsm=to_decimal(raw.get("gsm"), "gsm"),
            width_mm=to_decimal(raw.get("width_mm"), "width_mm"),
            length_m=to_decimal(raw.get("length_m"), "length_m"),
            weight_kg=to_decimal(raw.get("weight_kg"), "weight_kg"),
        ),
        quantity=Quantity(int(raw.get("quantity") or 1)),
        unit_price=Money(
            to_decimal(raw.get("price"), "price") or Decimal("0"),
            raw.get("currency", "IDR"),
        ),
        tax_rate=Percentage.of(raw.get("tax") or "0"),
        stock_id=raw.get("stock_id"),
        product_label=label,
    )
