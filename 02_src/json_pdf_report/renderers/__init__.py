"""Field renderers and whole-document passes."""

from .base import BaseRenderer
from .text import TextBlockRenderer
from .table import TableRenderer, format_cell, estimate_table_height
from .images import ImageRowRenderer
from .decorations import draw_decorations
from .page_numbers import stamp_page_numbers

__all__ = [
    "BaseRenderer",
    "TextBlockRenderer",
    "TableRenderer",
    "ImageRowRenderer",
    "format_cell",
    "estimate_table_height",
    "draw_decorations",
    "stamp_page_numbers",
]
