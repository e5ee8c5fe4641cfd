"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from functools import partial

from invoicing.application.generate_invoice import InvoiceRenderer
from invoicing.infrastructure.config import Settings
from invoicing.infrastructure.pdf.reportlab_surface import render_invoice
from invoicing.infrastructure.persistence.json_customer_repository import (
    JsonCustomerRepository,
)
from invoicing.infrastructure.persistence.json_order_repository import (
    JsonOrderRepository,
)
from invoicing.infrastructure.persistence.json_stock_repository import (
    JsonStockRepository,
)


def settings() -> Settings:
    return Settings.from_env()


def order_repository(cfg: Settings | None = None) -> JsonOrderRepository:
    cfg = cfg or settings()
    return JsonOrderRepository(cfg.data_dir / "orders.json")


def customer_repository(cfg: Settings | None = None) -> JsonCustomerRepository:
    cfg = cfg or settings()
    return JsonCustomerRepository(cfg.data_dir / "customers.json")


def stock_repository(cfg: Settings | None = None) -> JsonStockRepository:
    cfg = cfg or settings()
    return JsonStockRepository(cfg.data_dir / "stock.json")


def invoice_renderer(cfg: Settings | None = None) -> InvoiceRenderer:
    cfg = cfg or settings()
    return partial(render_invoice, company=cfg.company_profile())
