"""Order aggregate.

The Order owns its line items and its discount. ``total_amount`` is what
gets persisted and printed, but it is always derived from the items and
the discount through the shared pricing service, never typed in.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from invoicing.domain.exceptions import ValidationError
from invoicing.domain.model.discount import Discount, OrderTotals
from invoicing.domain.model.line_item import LineItem
from invoicing.domain.model.value_objects import Money
from invoicing.domain.service.pricing import compute_order_total


@dataclass
class Order:
    """Aggregate root for sales orders.

    Use the ``Order.create()`` factory for new orders; it enforces all
    business rules and derives the total. The ``__init__`` is intentionally
    simple so the repository can reconstitute persisted orders (including
    legacy ones with no items) without re-validating.
    """

    id: int | None
    order_no: str
    customer_id: str
    items: list[LineItem]
    discount: Discount = field(default_factory=Discount.none)
    total_amount: Money = field(default_factory=Money.zero)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    note: str = ""

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def create(
        order_no: str,
        customer_id: str,
        items: list[LineItem],
        discount: Discount | None = None,
        note: str = "",
        created_at: datetime | None = None,
        log=None,
    ) -> Order:
        """Create a new order, enforcing all invariants.

        Items are priced strictly: an unknown product type or a missing
        dimension rejects the order instead of pricing it at zero.
        """
        if not customer_id or not customer_id.strip():
            raise ValidationError("Customer is required")

        if not items:
            raise ValidationError("Order must contain at least one item")

        discount = discount or Discount.none()
        totals = compute_order_total(items, discount, strict=True, log=log)

        return Order(
            id=None,
            order_no=order_no,
            customer_id=customer_id.strip(),
            items=list(items),
            discount=discount,
            total_amount=totals.total,
            created_at=created_at or datetime.now(timezone.utc),
            note=note.strip(),
        )

    # --- Computed properties --------------------------------------------------

    def totals(self, log=None) -> OrderTotals:
        return compute_order_total(self.items, self.discount, log=log)
