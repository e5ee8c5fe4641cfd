"""Smoke tests for the ReportLab PDF output."""

from datetime import datetime, timezone

from invoicing.domain.model.customer import Customer
from invoicing.domain.model.line_item import LineItem, ProductType
from invoicing.domain.model.order import Order
from invoicing.domain.model.value_objects import Money, Quantity
from invoicing.infrastructure.pdf.reportlab_surface import ReportLabSurface, render_invoice
from invoicing.rendering.layout import ROWS_PER_HALF

CUSTOMER = Customer(id="c1", name="Budi", company="CV Maju Jaya")


def _order(n_items: int) -> Order:
    items = [LineItem(ProductType.INK, Quantity(1), Money.of("150000")) for _ in range(n_items)]
    order = Order(
        id=1,
        order_no="SO2610001",
        customer_id="c1",
        items=items,
        created_at=datetime(2026, 10, 17, tzinfo=timezone.utc),
    )
    order.total_amount = order.totals().total
    return order


def test_single_page_invoice():
    pdf = render_invoice(_order(1), CUSTOMER)
    assert pdf.startswith(b"%PDF")
    assert b"/Count 1" in pdf


def test_overflow_adds_pages():
    pdf = render_invoice(_order(2 * ROWS_PER_HALF + 1), CUSTOMER)
    assert b"/Count 2" in pdf


def test_empty_order_still_renders():
    pdf = render_invoice(_order(0), CUSTOMER)
    assert pdf.startswith(b"%PDF")


def test_surface_finish_returns_bytes():
    surface = ReportLabSurface(title="blank")
    surface.set_font(12, bold=True)
    surface.text(20, 20, "left")
    surface.text(190, 20, "right", align="right")
    surface.text(105, 20, "centre", align="center")
    surface.line(20, 22, 190, 22)
    surface.new_page()
    surface.text(20, 20, "second")
    pdf = surface.finish()
    assert pdf.startswith(b"%PDF")
    assert b"/Count 2" in pdf
