"""Application service: check a stored order total against the pricing rules."""

from __future__ import annotations

from invoicing.application.dto import OrderDTO, order_to_dto
from invoicing.application.show_order import load_order
from invoicing.domain.repository.order_repository import OrderRepository
from invoicing.domain.service.pricing import price_items, verify_total_amount


class ReconcileOrderHandler:

    def __init__(self, order_repo: OrderRepository, log=None) -> None:
        self._order_repo = order_repo
        self._log = log

    def handle(self, order_no: str) -> OrderDTO:
        """Raises TotalAmountMismatchError if the stored total has drifted."""
        order = load_order(self._order_repo, order_no)
        priced = price_items(order.items, log=self._log)
        verify_total_amount(order, priced=priced)
        return order_to_dto(order, priced=priced)
