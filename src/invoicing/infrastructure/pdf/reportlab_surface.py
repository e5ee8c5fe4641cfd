"""ReportLab-backed drawing surface for invoices.

Converts the paginator's top-left millimetre coordinates to ReportLab's
bottom-left points on an A4 canvas and returns the PDF as bytes.
"""

from __future__ import annotations

from io import BytesIO

from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.pdfgen import canvas

from invoicing.domain.model.customer import Customer
from invoicing.domain.model.order import Order
from invoicing.rendering.company import CompanyProfile
from invoicing.rendering.paginator import InvoicePaginator, Surface

_REGULAR = "Helvetica"
_BOLD = "Helvetica-Bold"


class ReportLabSurface(Surface):

    def __init__(self, title: str | None = None) -> None:
        self._buf = BytesIO()
        self._canvas = canvas.Canvas(self._buf, pagesize=A4)
        if title:
            self._canvas.setTitle(title)
        self._width, self._height = A4
        self._font = (_REGULAR, 10.0)
        self._apply_defaults()

    # --- Surface interface ----------------------------------------------------

    def set_font(self, size: float, bold: bool = False) -> None:
        self._font = (_BOLD if bold else _REGULAR, size)
        self._canvas.setFont(*self._font)

    def text(self, x: float, y: float, value: str, align: str = "left") -> None:
        px, py = x * mm, self._height - y * mm
        if align == "right":
            self._canvas.drawRightString(px, py, value)
        elif align == "center":
            self._canvas.drawCentredString(px, py, value)
        else:
            self._canvas.drawString(px, py, value)

    def line(self, x1: float, y1: float, x2: float, y2: float) -> None:
        self._canvas.line(x1 * mm, self._height - y1 * mm, x2 * mm, self._height - y2 * mm)

    def new_page(self) -> None:
        self._canvas.showPage()
        # showPage resets the graphics state
        self._apply_defaults()

    def finish(self) -> bytes:
        self._canvas.showPage()
        self._canvas.save()
        return self._buf.getvalue()

    # --- Internal helpers -----------------------------------------------------

    def _apply_defaults(self) -> None:
        self._canvas.setLineWidth(0.1 * mm)
        self._canvas.setStrokeColorRGB(0, 0, 0)
        self._canvas.setFont(*self._font)


def render_invoice(
    order: Order,
    customer: Customer,
    company: CompanyProfile | None = None,
    log=None,
) -> bytes:
    """Render *order* for *customer* as PDF bytes."""
    surface = ReportLabSurface(title=f"Invoice {order.order_no}")
    return InvoicePaginator(surface, company=company, log=log).render(order, customer)
