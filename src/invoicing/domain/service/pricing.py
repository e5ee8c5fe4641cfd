"""Domain service: line item pricing and order aggregation.

Every caller that needs an item amount or an order total (order entry,
order details, invoice rendering, reconciliation) goes through this
module, so the formulas exist exactly once.

Formulas, with tax always applied last as ``subtotal * (1 + tax/100)``:

    Jumbo Roll (sublimation)   unit_price * weight_kg
    Roll (sublimation)         unit_price * width_mm/1000 * length_m * quantity
    Protect Paper              unit_price * weight_kg
    DTF Film, Ink              unit_price * quantity
    Unclassified               unit_price * quantity   (degraded, logged)

A missing dimension counts as zero and is reported on the result instead
of raising, unless ``strict`` is requested.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable

import structlog

from invoicing.domain.exceptions import (
    MissingDimensionError,
    TotalAmountMismatchError,
    UnknownProductTypeError,
)
from invoicing.domain.model.discount import Discount, OrderTotals
from invoicing.domain.model.line_item import LineItem, PricingKind
from invoicing.domain.model.value_objects import Money

logger = structlog.get_logger(__name__)

_ZERO = Decimal("0")
_MM_PER_M = Decimal("1000")


@dataclass(frozen=True)
class ItemPrice:
    """Priced line item.

    ``missing`` is empty for a clean result; otherwise it names the fields
    that were absent and the amount is a degraded one.
    """

    kind: PricingKind
    subtotal: Money
    amount: Money
    missing: tuple[str, ...] = ()

    @property
    def degraded(self) -> bool:
        return bool(self.missing)


def _dimension(value: Decimal | None, name: str, missing: list[str]) -> Decimal:
    if value is None:
        missing.append(name)
        return _ZERO
    return value


def _subtotal(item: LineItem, kind: PricingKind, missing: list[str]) -> Money:
    price = item.unit_price
    spec = item.specification

    if kind is PricingKind.SUBLIMATION_JUMBO_ROLL or kind is PricingKind.PROTECT_PAPER:
        return price * _dimension(spec.weight_kg, "weight_kg", missing)

    if kind is PricingKind.SUBLIMATION_ROLL:
        width_m = _dimension(spec.width_mm, "width_mm", missing) / _MM_PER_M
        length = _dimension(spec.length_m, "length_m", missing)
        return price * (width_m * length * item.quantity.value)

    if kind is PricingKind.DTF_FILM or kind is PricingKind.INK:
        return price * item.quantity.value

    if kind is PricingKind.UNCLASSIFIED:
        missing.append("sub_variant" if item.product_type else "product_type")
        return price * item.quantity.value

    raise AssertionError(f"unhandled pricing kind {kind!r}")


def price_item(item: LineItem, *, strict: bool = False, log=None) -> ItemPrice:
    """Compute the tax-inclusive amount of one line item.

    With ``strict`` an unclassified item raises UnknownProductTypeError and
    a missing dimension raises MissingDimensionError.
    """
    log = log or logger
    kind = item.kind
    missing: list[str] = []
    subtotal = _subtotal(item, kind, missing)
    amount = subtotal * item.tax_rate.multiplier
    result = ItemPrice(kind=kind, subtotal=subtotal, amount=amount, missing=tuple(missing))

    if not result.degraded:
        return result

    if kind is PricingKind.UNCLASSIFIED:
        if strict:
            raise UnknownProductTypeError(
                f"Cannot price item of unknown product type {item.type_label!r}"
            )
        log.warning(
            "pricing_fallback",
            product_type=item.type_label,
            missing=list(result.missing),
            amount=str(amount.amount),
        )
        return result

    if strict:
        raise MissingDimensionError(kind.value, result.missing)
    log.warning(
        "pricing_degraded",
        kind=kind.value,
        missing=list(result.missing),
        amount=str(amount.amount),
    )
    return result


def compute_item_amount(item: LineItem, *, log=None) -> Money:
    return price_item(item, log=log).amount


def price_items(items: Iterable[LineItem], *, strict: bool = False, log=None) -> list[ItemPrice]:
    return [price_item(item, strict=strict, log=log) for item in items]


def total_priced_items(
    priced: Iterable[ItemPrice],
    discount: Money | Discount | None = None,
) -> OrderTotals:
    """Sum already priced items, cap the discount at the subtotal, round the total."""
    subtotal = Money.zero()
    for result in priced:
        subtotal = subtotal + result.amount

    if discount is None:
        requested = Money.zero()
    elif isinstance(discount, Discount):
        requested = discount.resolve(subtotal)
    else:
        requested = discount

    applied = requested if requested <= subtotal else subtotal
    total = (subtotal - applied).rounded()
    return OrderTotals(subtotal=subtotal, applied_discount=applied, total=total)


def compute_order_total(
    items: Iterable[LineItem],
    discount: Money | Discount | None = None,
    *,
    strict: bool = False,
    log=None,
) -> OrderTotals:
    """Price every item once, then aggregate."""
    return total_priced_items(price_items(items, strict=strict, log=log), discount)


def verify_total_amount(order, *, priced: list[ItemPrice] | None = None, log=None) -> OrderTotals:
    """Recompute an order's totals and compare with its stored total.

    Pass ``priced`` when the items were already priced for display.
    Raises TotalAmountMismatchError when they differ.
    """
    if priced is None:
        priced = price_items(order.items, log=log)
    totals = total_priced_items(priced, order.discount)
    if totals.total != order.total_amount.rounded():
        raise TotalAmountMismatchError(order.order_no, order.total_amount, totals.total)
    return totals
