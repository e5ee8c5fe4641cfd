"""Application service: live totals for the order form (query).

Nothing is persisted and incomplete items are allowed; their amounts are
reported as degraded so the form can flag them.
"""

from __future__ import annotations

from invoicing.application.dto import LineItemSpec, TotalsDTO, totals_to_dto
from invoicing.application.line_items import StockDimensionResolver, build_line_item
from invoicing.domain.model.discount import Discount
from invoicing.domain.repository.stock_repository import StockRepository
from invoicing.domain.service.pricing import price_items, total_priced_items


class QuoteOrderHandler:

    def __init__(self, stock_repo: StockRepository | None = None, log=None) -> None:
        self._resolver = StockDimensionResolver(stock_repo)
        self._log = log

    def handle(self, item_specs: list[LineItemSpec], discount: Discount | None = None) -> TotalsDTO:
        items = [self._resolver.resolve(build_line_item(spec)) for spec in item_specs]
        priced = price_items(items, log=self._log)
        return totals_to_dto(items, priced, total_priced_items(priced, discount))
