"""Tests for the invoice paginator, drawn onto a recording surface."""

from datetime import datetime, timezone
from decimal import Decimal

import pytest
from structlog.testing import capture_logs

from invoicing.domain.model.customer import Customer
from invoicing.domain.model.discount import Discount
from invoicing.domain.model.line_item import (
    LineItem,
    ProductType,
    Specification,
    SubVariant,
)
from invoicing.domain.model.order import Order
from invoicing.domain.model.value_objects import Money, Percentage, Quantity
from invoicing.rendering.cells import product_cell, quantity_cell, spec_cell
from invoicing.rendering.company import CompanyProfile
from invoicing.rendering.layout import BOTTOM_MARGIN, HALF_HEIGHT, PAGE_HEIGHT, ROWS_PER_HALF
from invoicing.rendering.paginator import (
    CONTINUED_TEXT,
    NO_ITEMS_TEXT,
    WARRANTY_TITLE,
    InvoicePaginator,
)
from tests.fakes import RecordingSurface

CUSTOMER = Customer(
    id="c1",
    name="Budi",
    company="CV Maju Jaya",
    phone="0812-0000-1111",
    address="Jl. Merdeka 1, Bandung",
)


def _roll(price="10000", width="1000", length="50", qty=2, tax="10") -> LineItem:
    return LineItem(
        product_type=ProductType.SUBLIMATION_PAPER,
        sub_variant=SubVariant.ROLL,
        specification=Specification(
            gsm=Decimal("100"), width_mm=Decimal(width), length_m=Decimal(length)
        ),
        quantity=Quantity(qty),
        unit_price=Money.of(price),
        tax_rate=Percentage.of(tax),
    )


def _order(items, discount=None, total=None) -> Order:
    order = Order(
        id=1,
        order_no="SO2610001",
        customer_id="c1",
        items=list(items),
        discount=discount or Discount.none(),
        created_at=datetime(2026, 10, 17, tzinfo=timezone.utc),
    )
    order.total_amount = total if total is not None else order.totals().total
    return order


def _render(order, customer=CUSTOMER):
    surface = RecordingSurface()
    result = InvoicePaginator(surface).render(order, customer)
    return surface, result


class TestSingleHalf:

    def test_header_and_row_content(self):
        surface, result = _render(_order([_roll()]))
        texts = surface.texts
        assert result == b"%PDF-recorded"
        assert surface.finished
        assert "INVOICE" in texts
        assert "No: SO2610001" in texts
        assert "Tanggal: 17 October 2026" in texts
        assert "CV Maju Jaya" in texts
        assert "Budi" in texts
        for cell in ("100g Sublimation Paper", "1000 x 50", "2 Roll", "10.000", "10", "1.100.000"):
            assert cell in texts

    def test_company_profile_used(self):
        surface = RecordingSurface()
        company = CompanyProfile(name="PT CONTOH", address_lines=("Jl. Satu",), account_number="123")
        InvoicePaginator(surface, company=company).render(_order([_roll()]), CUSTOMER)
        assert "PT CONTOH" in surface.texts
        assert "No. Rek: 123" in surface.texts

    def test_missing_customer_fields_print_dash(self):
        surface, _ = _render(_order([_roll()]), Customer(id="c2", name="Ani"))
        assert surface.texts.count("-") == 3

    def test_totals_block_closes_the_half(self):
        order = _order([_roll()], Discount.amount("100000"))
        surface, _ = _render(order)
        texts = surface.texts
        assert texts.index("Subtotal:") < texts.index("Diskon:") < texts.index("Total:")
        assert "1.000.000" in texts
        assert "100.000" in texts
        assert surface.count(WARRANTY_TITLE) == 1
        assert surface.count("Penerima") == 1
        assert surface.count("Pengirim") == 1
        assert surface.count(CONTINUED_TEXT) == 0

    def test_discount_shown_clamped(self):
        surface, _ = _render(_order([_roll()], Discount.amount("1500000")))
        texts = surface.texts
        total_index = texts.index("Total:")
        assert texts[total_index + 1] == "0"
        assert texts[texts.index("Diskon:") + 1] == "1.100.000"

    def test_six_grid_columns(self):
        surface, _ = _render(_order([_roll()]))
        titles = ["Produk", "Tipe", "Qty", "Harga (Rp)", "Pajak (%)", "Jumlah (Rp)"]
        for title in titles:
            assert surface.count(title) == 1


class TestOverflow:

    @pytest.mark.parametrize(
        "n_items,halves,pages",
        [
            (ROWS_PER_HALF, 1, 1),
            (ROWS_PER_HALF + 1, 2, 1),
            (2 * ROWS_PER_HALF, 2, 1),
            (2 * ROWS_PER_HALF + 1, 3, 2),
            (4 * ROWS_PER_HALF + 1, 5, 3),
        ],
    )
    def test_halves_and_pages(self, n_items, halves, pages):
        surface, _ = _render(_order([_roll() for _ in range(n_items)]))
        assert surface.count("INVOICE") == halves
        assert surface.count("Total:") == halves
        assert surface.count(WARRANTY_TITLE) == halves
        assert surface.count(CONTINUED_TEXT) == halves - 1
        assert surface.pages == pages

    def test_every_item_drawn_once(self):
        items = [_roll(price=str(1000 + i)) for i in range(2 * ROWS_PER_HALF + 3)]
        surface, _ = _render(_order(items))
        for i in range(len(items)):
            assert surface.count(Money.of(1000 + i).plain()) == 1

    def test_content_stays_inside_its_half(self):
        surface, _ = _render(_order([_roll() for _ in range(3 * ROWS_PER_HALF)]))
        for page in range(surface.pages):
            ys = [op[2] for op in surface.ops if op[0] == "text" and op[5] == page]
            assert max(ys) <= PAGE_HEIGHT - BOTTOM_MARGIN

        first_half_ys = []
        for op in surface.ops:
            if op[0] == "text" and op[5] == 0 and op[2] < HALF_HEIGHT:
                first_half_ys.append(op[2])
        assert max(first_half_ys) <= HALF_HEIGHT - BOTTOM_MARGIN

    def test_bottom_half_starts_at_middle(self):
        surface, _ = _render(_order([_roll() for _ in range(ROWS_PER_HALF + 1)]))
        invoice_titles = surface.text_ops("INVOICE")
        assert invoice_titles[0][2] == pytest.approx(12)
        assert invoice_titles[1][2] == pytest.approx(HALF_HEIGHT + 12)

    def test_order_totals_repeated_on_each_half(self):
        items = [_roll() for _ in range(ROWS_PER_HALF + 1)]
        surface, _ = _render(_order(items))
        expected_total = Money.of(1100000 * len(items)).plain()
        assert surface.count(expected_total) == 2 * 2  # subtotal and total, per half


class TestEmptyOrder:

    def test_placeholder_and_stored_total(self):
        order = _order([], total=Money.of("250000"))
        surface, result = _render(order)
        texts = surface.texts
        assert result == b"%PDF-recorded"
        assert NO_ITEMS_TEXT in texts
        assert surface.count("INVOICE") == 1
        assert surface.count("Total:") == 1
        assert "250.000" in texts
        assert "Subtotal:" not in texts
        assert surface.pages == 1

    def test_logs_render(self):
        with capture_logs() as logs:
            _render(_order([], total=Money.zero()))
        rendered = [e for e in logs if e["event"] == "invoice_rendered"]
        assert rendered[0]["items"] == 0
        assert rendered[0]["order_no"] == "SO2610001"


class TestDegradedItems:

    def test_unclassified_item_rendered_with_fallback_amount(self):
        legacy = LineItem(
            product_type=None,
            quantity=Quantity(3),
            unit_price=Money.of("5000"),
            product_label="Vinyl",
        )
        with capture_logs() as logs:
            surface, _ = _render(_order([legacy]))
        assert "N/Ag Vinyl" in surface.texts
        assert "15.000" in surface.texts
        assert any(e["event"] == "pricing_fallback" for e in logs)

    def test_degraded_item_logged_once_per_render(self):
        item = LineItem(
            product_type=ProductType.PROTECT_PAPER,
            quantity=Quantity(1),
            unit_price=Money.of("3000"),
        )
        order = _order([item, _roll()])
        with capture_logs() as logs:
            _render(order)
        degraded = [e for e in logs if e["event"] == "pricing_degraded"]
        assert len(degraded) == 1
        assert degraded[0]["missing"] == ["weight_kg"]

    def test_jumbo_roll_without_weight_renders_zero(self):
        item = LineItem(
            product_type=ProductType.SUBLIMATION_PAPER,
            sub_variant=SubVariant.JUMBO_ROLL,
            specification=Specification(gsm=Decimal("90"), width_mm=Decimal("1600")),
            quantity=Quantity(1),
            unit_price=Money.of("20000"),
        )
        surface, _ = _render(_order([item]))
        assert "N/A" in surface.texts
        assert "1600" in surface.texts


class TestCells:

    def test_jumbo_roll_cells(self):
        item = LineItem(
            product_type=ProductType.SUBLIMATION_PAPER,
            sub_variant=SubVariant.JUMBO_ROLL,
            specification=Specification(
                gsm=Decimal("90"), width_mm=Decimal("1600"), length_m=Decimal("3000"), weight_kg=Decimal("21.50")
            ),
            quantity=Quantity(1),
            unit_price=Money.of("20000"),
        )
        assert product_cell(item) == "90g Sublimation Paper"
        assert spec_cell(item) == "1600"
        assert quantity_cell(item) == "21.5 kg"

    def test_ink_cells(self):
        item = LineItem(ProductType.INK, Quantity(4), Money.of("150000"))
        assert product_cell(item) == "N/Ag Ink"
        assert spec_cell(item) == "-"
        assert quantity_cell(item) == "4 pcs"
