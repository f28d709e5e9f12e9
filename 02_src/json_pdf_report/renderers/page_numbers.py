"""Final pass stamping "Page i of N" on every page."""

import logging

from ..core.canvas import PdfCanvas

logger = logging.getLogger(__name__)

PAGE_NUMBER_FONT_SIZE = 10
# Offsets from the bottom-right corner
RIGHT_OFFSET = 80
BOTTOM_OFFSET = 30


def stamp_page_numbers(canvas: PdfCanvas) -> int:
    """Stamp every page with its 1-based number and the total.

    The page count is read once before stamping and no pages are added.

    Returns:
        Total number of pages stamped
    """
    total = canvas.page_count
    x = canvas.page_width - RIGHT_OFFSET
    y = canvas.page_height - BOTTOM_OFFSET
    for page_number in range(1, total + 1):
        canvas.set_page(page_number)
        canvas.text(f"Page {page_number} of {total}", x, y, font_size=PAGE_NUMBER_FONT_SIZE)
    logger.debug(f"Stamped page numbers on {total} pages")
    return total
