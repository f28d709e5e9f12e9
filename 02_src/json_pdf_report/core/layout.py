"""Page geometry and the vertical write cursor."""

import logging
from typing import Optional

from .canvas import PdfCanvas
from .furniture import Furniture

logger = logging.getLogger(__name__)

# Band kept clear above the page bottom (footer and page number live there)
BOTTOM_MARGIN = 100
# Cursor position after a page break
TOP_OF_CONTENT = 100
CONTENT_LEFT = 50
CONTENT_RIGHT_MARGIN = 50


class LayoutContext:
    """Single source of truth for the write position during one generation.

    Every renderer asks this object before growing content downward:
    ``will_fit`` answers whether a block fits above the bottom margin and
    ``break_page`` starts a fresh page with its furniture. ``ensure_space``
    and ``reserve`` combine both.

    Attributes:
        y: Current vertical write position
        page_has_content: Whether content was placed on the current page
    """

    def __init__(self, canvas: PdfCanvas, furniture: Furniture):
        self.canvas = canvas
        self.furniture = furniture
        self.page_width = canvas.page_width
        self.page_height = canvas.page_height
        self.bottom_margin = BOTTOM_MARGIN
        self.top_of_content = TOP_OF_CONTENT
        self.content_left = CONTENT_LEFT
        self.content_width = canvas.page_width - CONTENT_LEFT - CONTENT_RIGHT_MARGIN
        self.y: float = 0
        self.page_has_content = False

    def begin(self) -> float:
        """Draw the header on the current (first) page and place the cursor."""
        self.y = self.furniture.render_header(self.canvas.current_page_number)
        self.page_has_content = False
        return self.y

    @property
    def content_bottom(self) -> float:
        """Lowest y content may reach on any page."""
        return self.page_height - self.bottom_margin

    @property
    def usable_height(self) -> float:
        """Content height available on a freshly broken page."""
        return self.content_bottom - self.top_of_content

    def will_fit(self, needed: float, y: Optional[float] = None) -> bool:
        """Check whether ``needed`` units fit below ``y`` (default: cursor)."""
        start = self.y if y is None else y
        return start + needed < self.content_bottom

    def break_page(self) -> float:
        """Start a new page with furniture and reset the cursor."""
        page_number = self.canvas.add_page()
        self.furniture.apply(page_number)
        self.canvas.set_page(page_number)
        self.y = self.top_of_content
        self.page_has_content = False
        logger.debug(f"Page break -> page {page_number}")
        return self.y

    def ensure_space(self, needed: float) -> float:
        """Advance the cursor by ``needed``, breaking the page if it would overflow.

        Returns:
            The new cursor: ``y + needed``, or the top-of-content offset
            after a break
        """
        if not self.will_fit(needed):
            return self.break_page()
        self.y += needed
        return self.y

    def reserve(self, height: float) -> float:
        """Claim a box of ``height`` starting at the cursor.

        Breaks the page first when the box would overflow.

        Returns:
            Top y of the claimed box
        """
        if not self.will_fit(height):
            self.break_page()
        top = self.y
        self.y += height
        self.mark_content()
        return top

    def advance(self, amount: float) -> float:
        self.y += amount
        return self.y

    def mark_content(self) -> None:
        self.page_has_content = True
