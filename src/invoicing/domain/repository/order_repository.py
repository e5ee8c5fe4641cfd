"""Abstract repository for Order aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Iterable

from invoicing.domain.model.order import Order


def format_order_no(issued_at: datetime, sequence: int) -> str:
    """Order numbers read ``SO<yy><mm><seq>``, the sequence restarting monthly."""
    return f"SO{issued_at:%y%m}{sequence:03d}"


def next_in_month(now: datetime, existing: Iterable[str]) -> str:
    """Number following the highest sequence already issued in the month of *now*.

    Sequences past 999 grow a fourth digit, so the suffix is read in full.
    """
    prefix = f"SO{now:%y%m}"
    sequences = [
        int(order_no[len(prefix):])
        for order_no in existing
        if order_no.startswith(prefix) and order_no[len(prefix):].isdigit()
    ]
    return format_order_no(now, max(sequences, default=0) + 1)


class OrderRepository(ABC):

    @abstractmethod
    def next_order_no(self, now: datetime) -> str:
        """Issue the next order number for the month of *now*."""

    @abstractmethod
    def get_by_id(self, order_id: int) -> Order | None:
        """Return an order by its ID, or None if not found."""

    @abstractmethod
    def get_by_order_no(self, order_no: str) -> Order | None:
        """Return an order by its order number, or None if not found."""

    @abstractmethod
    def save(self, order: Order) -> None:
        """Persist a new or updated order."""
