"""Abstract repository for stock records."""

from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal

from invoicing.domain.model.line_item import ProductType
from invoicing.domain.model.stock import StockRecord


class StockRepository(ABC):

    @abstractmethod
    def get_by_id(self, stock_id: str) -> StockRecord | None:
        """Return a stock record by ID, or None if not found."""

    @abstractmethod
    def find_matching(
        self, product_type: ProductType, gsm: Decimal, width_mm: Decimal
    ) -> StockRecord | None:
        """Return the first record with the same type, GSM and width."""

    @abstractmethod
    def list_all(self) -> list[StockRecord]:
        """Return all stock records."""
