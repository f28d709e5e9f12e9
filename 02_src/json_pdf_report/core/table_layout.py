"""Grid table layout drawn on a PdfCanvas, with page-break support."""

import logging
import math
from dataclasses import dataclass
from typing import Callable, List, Sequence

from .canvas import Color, PdfCanvas

logger = logging.getLogger(__name__)

HEAD_FILL: Color = (41 / 255, 128 / 255, 185 / 255)
HEAD_TEXT: Color = (1.0, 1.0, 1.0)
BODY_FILL: Color = (1.0, 1.0, 1.0)
BODY_TEXT: Color = (80 / 255, 80 / 255, 80 / 255)
GRID_COLOR: Color = (200 / 255, 200 / 255, 200 / 255)

TABLE_FONT_SIZE = 10
CELL_PADDING = 5
LINE_HEIGHT_FACTOR = 1.15
ELLIPSIS = "..."


@dataclass
class _RowLayout:
    cells: List[List[str]]
    height: float


class GridTable:
    """A header row plus body rows drawn as a bordered grid.

    Columns share the table width equally; cell text wraps inside its
    column and the tallest cell sets the row height. When a row does not
    fit above ``bottom`` the table asks for a new page and repeats the
    header row there.
    """

    def __init__(
        self,
        canvas: PdfCanvas,
        columns: Sequence[str],
        rows: Sequence[Sequence[str]],
        x: float,
        width: float,
        font_size: float = TABLE_FONT_SIZE,
        padding: float = CELL_PADDING,
    ):
        """Initialize a table.

        Args:
            canvas: Canvas to draw on
            columns: Header labels
            rows: Body cells as strings, one list per row
            x: Left edge of the table
            width: Total table width
            font_size: Cell font size
            padding: Inner cell padding
        """
        self.canvas = canvas
        self.columns = list(columns)
        self.rows = [list(row) for row in rows]
        self.x = x
        self.width = width
        self.font_size = font_size
        self.padding = padding
        self.line_height = font_size * LINE_HEIGHT_FACTOR
        self.column_width = width / max(1, len(self.columns))
        self.final_y: float = 0

    def _layout_row(self, cells: Sequence[str], bold: bool = False) -> _RowLayout:
        text_width = self.column_width - 2 * self.padding
        wrapped = [
            self.canvas.split_text_to_size(cell, text_width, self.font_size, bold) or [""]
            for cell in cells
        ]
        lines = max(len(cell_lines) for cell_lines in wrapped)
        return _RowLayout(cells=wrapped, height=lines * self.line_height + 2 * self.padding)

    def _clip(self, row: _RowLayout, max_height: float) -> _RowLayout:
        """Truncate a row taller than ``max_height``, marking cut cells."""
        if row.height <= max_height:
            return row
        max_lines = max(1, math.floor((max_height - 2 * self.padding) / self.line_height))
        cells = []
        for cell_lines in row.cells:
            if len(cell_lines) > max_lines:
                kept = cell_lines[:max_lines]
                kept[-1] = kept[-1][: max(0, len(kept[-1]) - len(ELLIPSIS))] + ELLIPSIS
                cell_lines = kept
            cells.append(cell_lines)
        logger.warning(f"Table row truncated to {max_lines} lines to fit one page")
        return _RowLayout(cells=cells, height=max_lines * self.line_height + 2 * self.padding)

    def _draw_row(self, row: _RowLayout, top: float, head: bool = False) -> float:
        fill = HEAD_FILL if head else BODY_FILL
        text_color = HEAD_TEXT if head else BODY_TEXT
        for index, cell_lines in enumerate(row.cells):
            left = self.x + index * self.column_width
            self.canvas.fill_rect(left, top, self.column_width, row.height, fill)
            self.canvas.stroke_rect(left, top, self.column_width, row.height, GRID_COLOR)
            for line_no, line in enumerate(cell_lines):
                baseline = top + self.padding + (line_no + 1) * self.line_height - 0.25 * self.line_height
                self.canvas.text(
                    line,
                    left + self.padding,
                    baseline,
                    font_size=self.font_size,
                    bold=head,
                    color=text_color,
                )
        return top + row.height

    def draw(
        self,
        start_y: float,
        bottom: float,
        page_top: float,
        new_page: Callable[[], float],
    ) -> float:
        """Draw the table starting at ``start_y``.

        Args:
            start_y: Top of the header row on the current page
            bottom: Lowest y any row may reach
            page_top: Top y on pages created by ``new_page``
            new_page: Creates a page (with furniture) and returns its top y

        Returns:
            Bottom y of the last drawn row (also kept in ``final_y``)
        """
        head = self._clip(self._layout_row(self.columns, bold=True), (bottom - page_top) / 2)
        body = [
            self._clip(self._layout_row(row), bottom - page_top - head.height)
            for row in self.rows
        ]

        y = start_y
        first_height = head.height + (body[0].height if body else 0)
        if y + first_height > bottom and y > page_top:
            y = new_page()
        y = self._draw_row(head, y, head=True)

        for row in body:
            if y + row.height > bottom:
                y = new_page()
                y = self._draw_row(head, y, head=True)
            y = self._draw_row(row, y)

        self.final_y = y
        return y
