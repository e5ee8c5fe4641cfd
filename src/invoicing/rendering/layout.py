"""Invoice page geometry, column allocation and the layout cursor.

All measurements are millimetres with the origin at the top-left corner
of the page; the drawing surface converts to its own units. An A4 page is
split into two half-invoice regions stacked vertically.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from invoicing.domain.exceptions import LayoutError

PAGE_WIDTH = 210.0
PAGE_HEIGHT = 297.0
HALF_HEIGHT = PAGE_HEIGHT / 2
BOTTOM_MARGIN = 4.0

TABLE_X = 20.0
TABLE_WIDTH = 170.0
CELL_PADDING = 2.0

HEADER_HEIGHT = 48.0
TABLE_HEADER_HEIGHT = 6.0
ROW_HEIGHT = 6.0

# Footer block: subtotal/discount/total, warranty notice, signatures and
# the "continued" marker on halves that are not the last one.
FOOTER_GAP = 2.0
TOTALS_LINE = 5.0
WARRANTY_GAP = 6.0
WARRANTY_LINE = 4.0
WARRANTY_LINES = 2
SIGNATURE_GAP = 14.0
CONTINUED_LINE = 5.0
FOOTER_RESERVE = (
    FOOTER_GAP
    + 3 * TOTALS_LINE
    + WARRANTY_GAP
    + WARRANTY_LINES * WARRANTY_LINE
    + SIGNATURE_GAP
    + CONTINUED_LINE
)

ROWS_PER_HALF = int(
    (HALF_HEIGHT - BOTTOM_MARGIN - HEADER_HEIGHT - TABLE_HEADER_HEIGHT - FOOTER_RESERVE)
    // ROW_HEIGHT
)


# ---------------------------------------------------------------------------
# Columns
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ColumnSpec:
    key: str
    title: str
    min_width: float
    flex: int = 0
    align: str = "left"


@dataclass(frozen=True)
class Column:
    key: str
    title: str
    x: float
    width: float
    align: str = "left"

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def text_x(self) -> float:
        if self.align == "right":
            return self.right - CELL_PADDING
        return self.x + CELL_PADDING


INVOICE_COLUMNS: tuple[ColumnSpec, ...] = (
    ColumnSpec("product", "Produk", 44, flex=3),
    ColumnSpec("spec", "Tipe", 30, flex=2),
    ColumnSpec("quantity", "Qty", 18, flex=1),
    ColumnSpec("price", "Harga (Rp)", 22, flex=1, align="right"),
    ColumnSpec("tax", "Pajak (%)", 14, align="right"),
    ColumnSpec("amount", "Jumlah (Rp)", 26, flex=1, align="right"),
)


def allocate_columns(
    specs: tuple[ColumnSpec, ...] | list[ColumnSpec],
    table_x: float = TABLE_X,
    table_width: float = TABLE_WIDTH,
) -> list[Column]:
    """Give every column its minimum width plus a flex share of the rest.

    When no column flexes the leftover width goes to the last column, so
    the grid always spans the full table width.
    """
    if not specs:
        raise LayoutError("A table needs at least one column")

    fixed = sum(spec.min_width for spec in specs)
    if fixed > table_width:
        raise LayoutError(
            f"Column minimums ({fixed}mm) exceed the table width ({table_width}mm)"
        )

    remaining = table_width - fixed
    total_flex = sum(spec.flex for spec in specs)

    columns: list[Column] = []
    x = table_x
    for index, spec in enumerate(specs):
        if total_flex:
            width = spec.min_width + remaining * spec.flex / total_flex
        elif index == len(specs) - 1:
            width = spec.min_width + remaining
        else:
            width = spec.min_width
        columns.append(Column(spec.key, spec.title, x, width, spec.align))
        x += width
    return columns


# ---------------------------------------------------------------------------
# Cursor
# ---------------------------------------------------------------------------


class HalfState(Enum):
    EMPTY = "EMPTY"
    HEADER_DRAWN = "HEADER_DRAWN"
    ROWS_FILLING = "ROWS_FILLING"
    TOTALS_DRAWN = "TOTALS_DRAWN"
    CLOSED = "CLOSED"


_TRANSITIONS = {
    HalfState.EMPTY: {HalfState.HEADER_DRAWN},
    HalfState.HEADER_DRAWN: {HalfState.ROWS_FILLING},
    HalfState.ROWS_FILLING: {HalfState.TOTALS_DRAWN},
    HalfState.TOTALS_DRAWN: {HalfState.CLOSED},
    HalfState.CLOSED: set(),
}


@dataclass
class PageLayoutCursor:
    """Where the next element goes: page, half (0 = top, 1 = bottom), y.

    One cursor per render; never shared or persisted.
    """

    page: int = 0
    half: int = 0
    y: float = 0.0
    state: HalfState = HalfState.EMPTY

    @property
    def half_top(self) -> float:
        return self.half * HALF_HEIGHT

    @property
    def half_bottom(self) -> float:
        return self.half_top + HALF_HEIGHT - BOTTOM_MARGIN

    def fits(self, height: float, reserve: float = 0.0) -> bool:
        return self.y + height + reserve <= self.half_bottom

    def advance(self, height: float) -> float:
        """Move down by *height*; returns the y the element started at."""
        start = self.y
        self.y += height
        return start

    def transition(self, state: HalfState) -> None:
        if state not in _TRANSITIONS[self.state]:
            raise LayoutError(
                f"Invalid half-invoice transition {self.state.value} -> {state.value}"
            )
        self.state = state

    def next_half(self) -> bool:
        """Open the next half-invoice region.

        Returns True when that required starting a new page.
        """
        if self.state is not HalfState.CLOSED:
            raise LayoutError(
                f"Cannot open a new half while the current one is {self.state.value}"
            )
        new_page = self.half == 1
        if new_page:
            self.page += 1
            self.half = 0
        else:
            self.half = 1
        self.y = self.half_top
        self.state = HalfState.EMPTY
        return new_page
