"""Application service: Create Order use case.

Orchestrates the flow between repositories and the domain model:
customer lookup, stock lookups for blank dimensions, order-number
issuance, then Order creation (which prices every item strictly).
"""

from __future__ import annotations

from datetime import datetime, timezone

import structlog

from invoicing.application.dto import LineItemSpec, OrderDTO, order_to_dto
from invoicing.application.line_items import StockDimensionResolver, build_line_item
from invoicing.domain.exceptions import EntityNotFoundError
from invoicing.domain.model.discount import Discount
from invoicing.domain.model.order import Order
from invoicing.domain.repository.customer_repository import CustomerRepository
from invoicing.domain.repository.order_repository import OrderRepository
from invoicing.domain.repository.stock_repository import StockRepository

logger = structlog.get_logger(__name__)


class CreateOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        customer_repo: CustomerRepository,
        stock_repo: StockRepository | None = None,
        log=None,
    ) -> None:
        self._order_repo = order_repo
        self._customer_repo = customer_repo
        self._resolver = StockDimensionResolver(stock_repo)
        self._log = log or logger

    def handle(
        self,
        customer_id: str,
        item_specs: list[LineItemSpec],
        discount: Discount | None = None,
        note: str = "",
        now: datetime | None = None,
    ) -> OrderDTO:
        """Create a new sales order.

        Steps:
        1. Make sure the customer exists.
        2. Build line items, filling blank dimensions from stock.
        3. Let the Order aggregate price and validate them.
        4. Persist and return a DTO.
        """
        if self._customer_repo.get_by_id(customer_id) is None:
            raise EntityNotFoundError(f"Customer not found: '{customer_id}'")

        items = [self._resolver.resolve(build_line_item(spec)) for spec in item_specs]
        now = now or datetime.now(timezone.utc)

        order = Order.create(
            order_no=self._order_repo.next_order_no(now),
            customer_id=customer_id,
            items=items,
            discount=discount,
            note=note,
            created_at=now,
            log=self._log,
        )
        self._order_repo.save(order)

        self._log.info(
            "order_created",
            order_no=order.order_no,
            items=len(order.items),
            total=str(order.total_amount.amount),
        )
        return order_to_dto(order, self._log)
