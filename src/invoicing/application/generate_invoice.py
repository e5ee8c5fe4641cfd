"""Application service: render an order's invoice to PDF.

Order and customer are fetched first; if either is missing the use case
fails before anything is drawn.
"""

from __future__ import annotations

from typing import Callable

from invoicing.application.show_order import load_order
from invoicing.domain.exceptions import EntityNotFoundError
from invoicing.domain.model.customer import Customer
from invoicing.domain.model.order import Order
from invoicing.domain.repository.customer_repository import CustomerRepository
from invoicing.domain.repository.order_repository import OrderRepository

InvoiceRenderer = Callable[[Order, Customer], bytes]


class GenerateInvoiceHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        customer_repo: CustomerRepository,
        renderer: InvoiceRenderer,
    ) -> None:
        self._order_repo = order_repo
        self._customer_repo = customer_repo
        self._renderer = renderer

    def handle(self, order_no: str) -> bytes:
        order = load_order(self._order_repo, order_no)
        customer = self._customer_repo.get_by_id(order.customer_id)
        if customer is None:
            raise EntityNotFoundError(
                f"Customer '{order.customer_id}' for order {order_no} not found"
            )
        return self._renderer(order, customer)
