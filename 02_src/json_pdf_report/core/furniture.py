"""Header and footer bands repeated on every page."""

import logging
from typing import Optional, Set

from ..schemas.document import HeaderFooterSpec
from .canvas import PdfCanvas

logger = logging.getLogger(__name__)

DEFAULT_HEADER_TEXT = "Comprehensive Business Report"
DEFAULT_FOOTER_TEXT = "Generated by JSON-to-PDF Library"

BAND_COLOR = (240 / 255, 240 / 255, 240 / 255)

HEADER_HEIGHT = 70
HEADER_TEXT_Y = 40
HEADER_RULE_Y = 65
# First content position below the header band
HEADER_CONTENT_Y = 90

FOOTER_HEIGHT = 60
FOOTER_TEXT_OFFSET = 40
FOOTER_FONT_SIZE = 10

SIDE_MARGIN = 50


class Furniture:
    """Draws header and footer bands on canvas pages.

    The header is always drawn, falling back to a default title. The footer
    is drawn only when the document declares one. The set of pages that
    already carry a footer is tracked so each page gets exactly one.
    """

    def __init__(
        self,
        canvas: PdfCanvas,
        header: Optional[HeaderFooterSpec],
        footer: Optional[HeaderFooterSpec],
        font_size: float,
    ):
        """Initialize furniture for one document.

        Args:
            canvas: Canvas to draw on
            header: Declared header, None for the default banner
            footer: Declared footer, None to draw no footer
            font_size: Document font size, used for header text
        """
        self.canvas = canvas
        self.header = header
        self.footer = footer
        self.font_size = font_size
        self.footed_pages: Set[int] = set()

    @property
    def has_footer(self) -> bool:
        return self.footer is not None

    def _aligned_x(self, align: str) -> float:
        if align == "left":
            return SIDE_MARGIN
        if align == "right":
            return self.canvas.page_width - SIDE_MARGIN
        return self.canvas.page_width / 2

    def render_header(self, page_number: int) -> float:
        """Draw the header band on a page.

        Returns:
            First y coordinate safe for content below the band
        """
        canvas = self.canvas
        canvas.set_page(page_number)
        spec = self.header or HeaderFooterSpec()

        canvas.fill_rect(0, 0, canvas.page_width, HEADER_HEIGHT, BAND_COLOR)
        canvas.text(
            spec.text or DEFAULT_HEADER_TEXT,
            self._aligned_x(spec.align),
            HEADER_TEXT_Y,
            font_size=spec.font_size or self.font_size,
            align=spec.align,
            color=spec.rgb,
        )
        canvas.line(SIDE_MARGIN, HEADER_RULE_Y, canvas.page_width - SIDE_MARGIN, HEADER_RULE_Y)
        return HEADER_CONTENT_Y

    def render_footer(self, page_number: int) -> None:
        """Draw the footer band on a page; no-op without a declared footer."""
        if self.footer is None or page_number in self.footed_pages:
            return

        canvas = self.canvas
        canvas.set_page(page_number)
        spec = self.footer

        canvas.fill_rect(
            0,
            canvas.page_height - FOOTER_HEIGHT,
            canvas.page_width,
            FOOTER_HEIGHT,
            BAND_COLOR,
        )
        canvas.text(
            spec.text or DEFAULT_FOOTER_TEXT,
            self._aligned_x(spec.align),
            canvas.page_height - FOOTER_TEXT_OFFSET,
            font_size=spec.font_size or FOOTER_FONT_SIZE,
            align=spec.align,
            color=spec.rgb,
        )
        self.footed_pages.add(page_number)

    def apply(self, page_number: int) -> float:
        """Draw header and footer on a page and return the content top."""
        top = self.render_header(page_number)
        self.render_footer(page_number)
        return top

    def complete_footers(self) -> None:
        """Draw the footer on every page that does not carry it yet."""
        if self.footer is None:
            return
        current = self.canvas.current_page_number
        missing = [
            n for n in range(1, self.canvas.page_count + 1)
            if n not in self.footed_pages
        ]
        for page_number in missing:
            self.render_footer(page_number)
        self.canvas.set_page(current)
        if missing:
            logger.debug(f"Footer completed on pages {missing}")
