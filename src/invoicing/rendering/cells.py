"""Text for the product, specification and quantity cells of an item."""

from __future__ import annotations

from decimal import Decimal

from invoicing.domain.model.line_item import LineItem, PricingKind


def number(value: Decimal | None) -> str:
    if value is None:
        return "N/A"
    return f"{value.normalize():f}"


def product_cell(item: LineItem) -> str:
    return f"{number(item.specification.gsm)}g {item.type_label}"


def spec_cell(item: LineItem) -> str:
    """Width x length; jumbo rolls show the width only."""
    spec = item.specification
    if spec.width_mm is None:
        return "-" if item.kind is PricingKind.INK else "N/A"
    if item.kind is PricingKind.SUBLIMATION_JUMBO_ROLL or spec.length_m is None:
        return number(spec.width_mm)
    return f"{number(spec.width_mm)} x {number(spec.length_m)}"


def quantity_cell(item: LineItem) -> str:
    if item.kind.sold_by_weight:
        weight = item.specification.weight_kg
        return f"{number(weight)} kg" if weight is not None else "N/A"
    if item.kind is PricingKind.INK:
        return f"{item.quantity} pcs"
    return f"{item.quantity} Roll"
