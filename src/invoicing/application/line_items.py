"""Turning order-form input into domain line items.

Dimensions the user left blank are taken from the selected stock record,
or from the first record with the same type, GSM and width, the way the
order form looks them up.
"""

from __future__ import annotations

from decimal import Decimal

from invoicing.application.dto import LineItemSpec
from invoicing.domain.exceptions import EntityNotFoundError
from invoicing.domain.model.line_item import (
    LineItem,
    ProductType,
    Specification,
    SubVariant,
)
from invoicing.domain.model.stock import StockRecord
from invoicing.domain.model.value_objects import (
    Money,
    Percentage,
    Quantity,
    to_decimal,
)
from invoicing.domain.repository.stock_repository import StockRepository


def build_line_item(spec: LineItemSpec) -> LineItem:
    return LineItem(
        product_type=ProductType.parse(spec.type),
        sub_variant=SubVariant.parse(spec.product),
        specification=Specification(
            gsm=to_decimal(spec.gsm, "gsm"),
            width_mm=to_decimal(spec.width_mm, "width"),
            length_m=to_decimal(spec.length_m, "length"),
            weight_kg=to_decimal(spec.weight_kg, "weight"),
        ),
        quantity=Quantity(spec.quantity),
        unit_price=Money(to_decimal(spec.price, "price") or Decimal("0")),
        tax_rate=Percentage.of(spec.tax),
        stock_id=spec.stock_id,
        product_label=spec.type,
    )


class StockDimensionResolver:

    def __init__(self, stock_repo: StockRepository | None) -> None:
        self._stock_repo = stock_repo

    def resolve(self, item: LineItem) -> LineItem:
        """Return *item* with blank dimensions filled from stock, if any."""
        record = self._find_record(item)
        if record is None:
            return item

        spec = item.specification
        filled = Specification(
            gsm=spec.gsm if spec.gsm is not None else record.gsm,
            width_mm=spec.width_mm if spec.width_mm is not None else record.width_mm,
            length_m=spec.length_m if spec.length_m is not None else record.length_m,
            weight_kg=spec.weight_kg if spec.weight_kg is not None else record.weight_kg,
        )
        if filled == spec:
            return item
        return LineItem(
            product_type=item.product_type,
            sub_variant=item.sub_variant,
            specification=filled,
            quantity=item.quantity,
            unit_price=item.unit_price,
            tax_rate=item.tax_rate,
            stock_id=item.stock_id or record.id,
            product_label=item.product_label,
        )

    def _find_record(self, item: LineItem) -> StockRecord | None:
        if self._stock_repo is None:
            return None
        if item.stock_id:
            record = self._stock_repo.get_by_id(item.stock_id)
            if record is None:
                raise EntityNotFoundError(f"Stock record not found: '{item.stock_id}'")
            return record
        spec = item.specification
        if item.product_type is None or spec.gsm is None or spec.width_mm is None:
            return None
        return self._stock_repo.find_matching(item.product_type, spec.gsm, spec.width_mm)
