"""Invoice paginator.

Lays an order out as a sequence of half-invoice regions, two per A4 page.
Each half is headed independently (company, invoice number, customer),
carries a six-column item grid and closes with the totals, the warranty
notice and signature lines. When the next row would push into the space
reserved for that footer, the half is closed and the next one opened.

Drawing goes through a ``Surface`` so the layout can be exercised without
producing a PDF.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

import structlog

from invoicing.domain.exceptions import LayoutError
from invoicing.domain.model.customer import Customer
from invoicing.domain.model.discount import OrderTotals
from invoicing.domain.model.line_item import LineItem
from invoicing.domain.model.order import Order
from invoicing.domain.service.pricing import ItemPrice, price_items, total_priced_items
from invoicing.rendering.cells import product_cell, quantity_cell, spec_cell
from invoicing.rendering.company import CompanyProfile
from invoicing.rendering.layout import (
    CONTINUED_LINE,
    FOOTER_GAP,
    FOOTER_RESERVE,
    HEADER_HEIGHT,
    INVOICE_COLUMNS,
    PAGE_WIDTH,
    ROW_HEIGHT,
    ROWS_PER_HALF,
    SIGNATURE_GAP,
    TABLE_HEADER_HEIGHT,
    TABLE_WIDTH,
    TABLE_X,
    TOTALS_LINE,
    WARRANTY_GAP,
    WARRANTY_LINE,
    Column,
    HalfState,
    PageLayoutCursor,
    allocate_columns,
)

logger = structlog.get_logger(__name__)

NO_ITEMS_TEXT = "(Tidak ada item)"
CONTINUED_TEXT = "Bersambung..."
WARRANTY_TITLE = "PERHATIAN SYARAT KLAIM GARANSI:"
WARRANTY_TEXT = (
    "1. Klaim atas jumlah dan kondisi barang yang diterima tidak melebihi "
    "1x24 jam terhitung sejak penerimaan barang.",
    "2. Klaim atas kualitas produk harus disertai dengan invoice dan artikel "
    "yang memuat informasi produk dan produk yang dimaksud.",
)

_LEFT = 20.0
_RIGHT = PAGE_WIDTH - 20.0
_LABEL_X = PAGE_WIDTH - 70.0
_TEXT_BASELINE = 4.5


class Surface(ABC):
    """Minimal drawing API, coordinates in millimetres from the top-left."""

    @abstractmethod
    def set_font(self, size: float, bold: bool = False) -> None: ...

    @abstractmethod
    def text(self, x: float, y: float, value: str, align: str = "left") -> None: ...

    @abstractmethod
    def line(self, x1: float, y1: float, x2: float, y2: float) -> None: ...

    @abstractmethod
    def new_page(self) -> None: ...

    @abstractmethod
    def finish(self) -> bytes:
        """Close the document and return its bytes."""


class InvoicePaginator:
    """Drives a Surface through the half-invoice state machine.

    Stateless between renders; create one per document since the surface
    is consumed by ``finish()``.
    """

    def __init__(
        self,
        surface: Surface,
        company: CompanyProfile | None = None,
        log=None,
    ) -> None:
        if ROWS_PER_HALF < 1:
            raise LayoutError("Half-invoice region cannot hold a single row")
        self._surface = surface
        self._company = company or CompanyProfile()
        self._log = log or logger

    # --- Public API -----------------------------------------------------------

    def render(self, order: Order, customer: Customer) -> bytes:
        log = self._log.bind(order_no=order.order_no)
        cursor = PageLayoutCursor()

        if not order.items:
            self._render_empty(cursor, order, customer)
            log.info("invoice_rendered", pages=1, halves=1, items=0)
            return self._surface.finish()

        priced = price_items(order.items, log=log)
        totals = total_priced_items(priced, order.discount)
        columns = self._open_half(cursor, order, customer, log)
        halves = 1

        for item, item_price in zip(order.items, priced):
            if not cursor.fits(ROW_HEIGHT, FOOTER_RESERVE):
                self._close_half(cursor, columns, totals, final=False)
                if cursor.next_half():
                    self._surface.new_page()
                halves += 1
                columns = self._open_half(cursor, order, customer, log)
            self._draw_row(cursor, columns, item, item_price)

        self._close_half(cursor, columns, totals, final=True)
        log.info(
            "invoice_rendered",
            pages=cursor.page + 1,
            halves=halves,
            items=len(order.items),
            total=str(totals.total.amount),
        )
        return self._surface.finish()

    # --- Half lifecycle -------------------------------------------------------

    def _open_half(self, cursor: PageLayoutCursor, order: Order, customer: Customer, log) -> list[Column]:
        log.debug("invoice_half_opened", page=cursor.page, half=cursor.half)
        self._draw_header(cursor, order, customer)
        cursor.transition(HalfState.HEADER_DRAWN)
        columns = self._draw_table_header(cursor)
        cursor.transition(HalfState.ROWS_FILLING)
        return columns

    def _close_half(
        self,
        cursor: PageLayoutCursor,
        columns: list[Column],
        totals: OrderTotals,
        final: bool,
    ) -> None:
        s = self._surface
        label_x = columns[-3].x + 2
        value_x = columns[-1].text_x

        cursor.advance(FOOTER_GAP)
        for label, money in (
            ("Subtotal:", totals.subtotal),
            ("Diskon:", totals.applied_discount),
            ("Total:", totals.total),
        ):
            y = cursor.advance(TOTALS_LINE)
            s.set_font(8, bold=label == "Total:")
            s.text(label_x, y + _TEXT_BASELINE, label)
            s.text(value_x, y + _TEXT_BASELINE, money.plain(), align="right")

        # Text below sits on the bottom edge of the band it advanced over.
        cursor.advance(WARRANTY_GAP)
        s.set_font(8, bold=True)
        s.text(PAGE_WIDTH / 2, cursor.y, WARRANTY_TITLE, align="center")
        s.set_font(7)
        for line in WARRANTY_TEXT:
            cursor.advance(WARRANTY_LINE)
            s.text(PAGE_WIDTH / 2, cursor.y, line, align="center")

        cursor.advance(SIGNATURE_GAP)
        s.set_font(8)
        s.text(50, cursor.y, "Penerima")
        s.text(160, cursor.y, "Pengirim")

        if not final:
            cursor.advance(CONTINUED_LINE)
            s.set_font(7)
            s.text(_RIGHT, cursor.y, CONTINUED_TEXT, align="right")

        cursor.transition(HalfState.TOTALS_DRAWN)
        cursor.transition(HalfState.CLOSED)

    def _render_empty(self, cursor: PageLayoutCursor, order: Order, customer: Customer) -> None:
        s = self._surface
        self._draw_header(cursor, order, customer)
        cursor.transition(HalfState.HEADER_DRAWN)
        columns = self._draw_table_header(cursor)
        cursor.transition(HalfState.ROWS_FILLING)

        y = cursor.advance(ROW_HEIGHT)
        s.set_font(8)
        s.text(PAGE_WIDTH / 2, y + _TEXT_BASELINE, NO_ITEMS_TEXT, align="center")
        self._draw_grid_row(y, [columns[0].x, columns[-1].right])

        cursor.advance(FOOTER_GAP)
        y = cursor.advance(TOTALS_LINE)
        s.set_font(8, bold=True)
        s.text(columns[-3].x + 2, y + _TEXT_BASELINE, "Total:")
        s.text(columns[-1].text_x, y + _TEXT_BASELINE, order.total_amount.plain(), align="right")

        cursor.transition(HalfState.TOTALS_DRAWN)
        cursor.transition(HalfState.CLOSED)

    # --- Drawing --------------------------------------------------------------

    def _draw_header(self, cursor: PageLayoutCursor, order: Order, customer: Customer) -> None:
        s = self._surface
        top = cursor.y
        company = self._company

        s.set_font(12, bold=True)
        s.text(_LEFT, top + 12, company.name)
        s.set_font(8)
        y = top + 16
        for line in company.address_lines:
            s.text(_LEFT, y, line)
            y += 4
        s.text(_LEFT, y, f"Telepon: {company.phone}")
        s.text(_LEFT, top + 30, f"Bank Transfer: {company.bank_name}")
        s.text(_LEFT, top + 34, f"No. Rek: {company.account_number}")
        s.text(_LEFT, top + 38, "a/n: ")
        s.set_font(8, bold=True)
        s.text(_LEFT + 6, top + 38, company.holder)

        s.set_font(14, bold=True)
        s.text(_RIGHT, top + 12, "INVOICE", align="right")
        s.set_font(8, bold=True)
        s.text(_RIGHT, top + 18, f"No: {order.order_no}", align="right")
        s.text(_RIGHT, top + 22, f"Tanggal: {order.created_at:%d %B %Y}", align="right")

        y = top + 28
        for label, value in (
            ("No. Kontak:", customer.phone),
            ("PIC:", customer.name),
            ("Pelanggan:", customer.company),
            ("Alamat:", customer.address),
        ):
            s.set_font(8, bold=True)
            s.text(_LABEL_X, y, label)
            s.set_font(8)
            s.text(_RIGHT, y, value or "-", align="right")
            y += 4

        cursor.y = top + HEADER_HEIGHT

    def _draw_table_header(self, cursor: PageLayoutCursor) -> list[Column]:
        s = self._surface
        columns = allocate_columns(INVOICE_COLUMNS, TABLE_X, TABLE_WIDTH)
        y = cursor.advance(TABLE_HEADER_HEIGHT)

        s.line(TABLE_X, y, TABLE_X + TABLE_WIDTH, y)
        s.set_font(8, bold=True)
        for column in columns:
            s.text(column.text_x, y + _TEXT_BASELINE, column.title, align=column.align)
        self._draw_grid_row(y, [c.x for c in columns] + [columns[-1].right])
        s.set_font(8)
        return columns

    def _draw_row(
        self, cursor: PageLayoutCursor, columns: list[Column], item: LineItem, priced: ItemPrice
    ) -> None:
        s = self._surface
        cells = {
            "product": product_cell(item),
            "spec": spec_cell(item),
            "quantity": quantity_cell(item),
            "price": item.unit_price.plain(),
            "tax": str(item.tax_rate),
            "amount": priced.amount.plain(),
        }
        y = cursor.advance(ROW_HEIGHT)
        s.set_font(8)
        for column in columns:
            s.text(column.text_x, y + _TEXT_BASELINE, cells[column.key], align=column.align)
        self._draw_grid_row(y, [c.x for c in columns] + [columns[-1].right])

    def _draw_grid_row(self, y: float, xs: list[float]) -> None:
        s = self._surface
        s.line(TABLE_X, y + ROW_HEIGHT, TABLE_X + TABLE_WIDTH, y + ROW_HEIGHT)
        for x in xs:
            s.line(x, y, x, y + ROW_HEIGHT)
