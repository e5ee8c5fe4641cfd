"""StockRecord: an inventory roll that line items are selected from.

Jumbo rolls carry their measured weight; divided rolls carry a length.
Order entry uses the matching record to fill in a weight the user did
not type.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from invoicing.domain.model.line_item import ProductType


@dataclass
class StockRecord:

    id: str
    product_type: ProductType
    gsm: Decimal
    width_mm: Decimal
    weight_kg: Decimal | None = None
    length_m: Decimal | None = None

    def matches(self, product_type: ProductType, gsm: Decimal, width_mm: Decimal) -> bool:
        return (
            self.product_type is product_type
            and self.gsm == gsm
            and self.width_mm == width_mm
        )
