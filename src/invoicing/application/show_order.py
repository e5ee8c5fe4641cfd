"""Application service: Show Order use case (query)."""

from __future__ import annotations

from invoicing.application.dto import OrderDTO, order_to_dto
from invoicing.domain.exceptions import EntityNotFoundError
from invoicing.domain.model.order import Order
from invoicing.domain.repository.order_repository import OrderRepository


def load_order(order_repo: OrderRepository, order_no: str) -> Order:
    order = order_repo.get_by_order_no(order_no)
    if order is None:
        raise EntityNotFoundError(f"Order {order_no} not found")
    return order


class ShowOrderHandler:

    def __init__(self, order_repo: OrderRepository, log=None) -> None:
        self._order_repo = order_repo
        self._log = log

    def handle(self, order_no: str) -> OrderDTO:
        return order_to_dto(load_order(self._order_repo, order_no), self._log)
