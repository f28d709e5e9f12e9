"""Table renderer for arrays of objects."""

import json
import logging
from typing import Any, Mapping

from ..core.classifier import FieldDescriptor
from ..core.table_layout import GridTable
from .base import BaseRenderer

logger = logging.getLogger(__name__)

ROW_HEIGHT_ESTIMATE = 25
TABLE_OVERHEAD = 50
TABLE_GAP = 30


def format_cell(value: Any) -> str:
    """Render a cell value as text; missing values become blank."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False, separators=(",", ":"))
    return str(value)


def estimate_table_height(row_count: int) -> float:
    """Upfront height estimate used to decide whether a table starts on a new page."""
    return row_count * ROW_HEIGHT_ESTIMATE + TABLE_OVERHEAD


class TableRenderer(BaseRenderer):
    """Renders a list of mappings as a grid with a header row.

    Columns come from the first row; other rows are read by column name.
    """

    def render(self, field: FieldDescriptor) -> None:
        ctx = self.context
        columns = field.columns
        if not columns:
            logger.warning(f"Table field '{field.key}' has no columns, skipping")
            return

        rows = [
            [format_cell(row.get(col)) if isinstance(row, Mapping) else "" for col in columns]
            for row in field.value
        ]

        estimated = estimate_table_height(len(rows))
        if not ctx.will_fit(estimated):
            logger.debug(
                f"Table '{field.key}' (~{estimated:.0f}pt) does not fit at y={ctx.y:.0f}, "
                "starting on a new page"
            )
            ctx.break_page()

        table = GridTable(self.canvas, columns, rows, x=ctx.content_left, width=ctx.content_width)
        start_page = self.canvas.current_page_number
        final_y = table.draw(
            start_y=ctx.y,
            bottom=ctx.content_bottom,
            page_top=ctx.top_of_content,
            new_page=ctx.break_page,
        )
        ctx.mark_content()
        ctx.y = final_y + TABLE_GAP

        logger.debug(
            f"Table '{field.key}': {len(rows)} rows on pages "
            f"{start_page}-{self.canvas.current_page_number}"
        )
