"""Drawing canvas over a PyMuPDF document.

Coordinates are in points with the origin at the top-left corner of the
page and y growing downward. Text is placed by its baseline.
"""

import logging
from pathlib import Path
from typing import List, Optional, Tuple

import fitz  # pymupdf

logger = logging.getLogger(__name__)

Color = Tuple[float, float, float]

# family -> (regular, bold) Base-14 font names
FONT_FAMILIES = {
    "times": ("tiro", "tibo"),
    "helvetica": ("helv", "hebo"),
    "courier": ("cour", "cobo"),
}

BLACK: Color = (0.0, 0.0, 0.0)


class WriteError(RuntimeError):
    """Raised when the PDF cannot be written to disk."""


def page_size(page_format: str, orientation: str = "portrait") -> Tuple[float, float]:
    """Return (width, height) in points for a paper format.

    Raises:
        ValueError: If the format is unknown
    """
    width, height = fitz.paper_size(page_format)
    if width <= 0 or height <= 0:
        raise ValueError(f"Unknown page format '{page_format}'")
    if orientation == "landscape":
        width, height = height, width
    return float(width), float(height)


class PdfCanvas:
    """Page-oriented drawing surface backed by ``fitz.Document``.

    The canvas always has a current page; it starts with one page, and
    ``add_page`` appends a page and makes it current.
    """

    def __init__(
        self,
        page_format: str = "a4",
        orientation: str = "portrait",
        font_type: str = "times",
    ):
        """Create an empty document with its first page.

        Args:
            page_format: Paper format understood by ``fitz.paper_size``
            orientation: "portrait" or "landscape"
            font_type: Font family, one of FONT_FAMILIES
        """
        self.page_width, self.page_height = page_size(page_format, orientation)
        if font_type not in FONT_FAMILIES:
            logger.warning(f"Unknown font family '{font_type}', falling back to times")
            font_type = "times"
        self.font_type = font_type
        self.doc = fitz.open()
        self._current: Optional[fitz.Page] = None
        self.add_page()

    # --- pages ---------------------------------------------------------

    def add_page(self) -> int:
        """Append a page, make it current and return its 1-based number."""
        self._current = self.doc.new_page(width=self.page_width, height=self.page_height)
        return self.page_count

    @property
    def page_count(self) -> int:
        return len(self.doc)

    @property
    def current_page_number(self) -> int:
        return self._current.number + 1

    def set_page(self, page_number: int) -> None:
        """Select the page subsequent draws go to (1-based)."""
        if page_number < 1 or page_number > self.page_count:
            raise ValueError(
                f"Invalid page number {page_number} "
                f"(must be 1-{self.page_count})"
            )
        self._current = self.doc[page_number - 1]

    # --- fonts and text ------------------------------------------------

    def font_name(self, bold: bool = False) -> str:
        regular, heavy = FONT_FAMILIES[self.font_type]
        return heavy if bold else regular

    def text_width(self, text: str, font_size: float, bold: bool = False) -> float:
        return fitz.get_text_length(text, fontname=self.font_name(bold), fontsize=font_size)

    def text(
        self,
        text: str,
        x: float,
        y: float,
        font_size: float,
        bold: bool = False,
        align: str = "left",
        color: Color = BLACK,
    ) -> None:
        """Draw a single line of text with its baseline at ``y``.

        With align="center" ``x`` is the line's midpoint, with
        align="right" its right edge.
        """
        if align != "left":
            width = self.text_width(text, font_size, bold)
            x = x - width / 2 if align == "center" else x - width
        self._current.insert_text(
            fitz.Point(x, y),
            text,
            fontsize=font_size,
            fontname=self.font_name(bold),
            color=color,
        )

    def split_text_to_size(
        self,
        text: str,
        max_width: float,
        font_size: float,
        bold: bool = False,
    ) -> List[str]:
        """Wrap text into lines no wider than ``max_width``.

        Line breaks in the text are kept; words wider than the limit are
        split across lines.
        """
        lines: List[str] = []
        for paragraph in str(text).splitlines():
            words = paragraph.split()
            if not words:
                lines.append("")
                continue

            current = ""
            for word in words:
                candidate = f"{current} {word}" if current else word
                if self.text_width(candidate, font_size, bold) <= max_width:
                    current = candidate
                    continue
                if current:
                    lines.append(current)
                while len(word) > 1 and self.text_width(word, font_size, bold) > max_width:
                    cut = self._fitting_prefix(word, max_width, font_size, bold)
                    lines.append(word[:cut])
                    word = word[cut:]
                current = word
            lines.append(current)
        return lines

    def _fitting_prefix(self, word: str, max_width: float, font_size: float, bold: bool) -> int:
        """Length of the longest prefix of ``word`` that fits (at least 1)."""
        low, high = 1, len(word)
        while low < high:
            mid = (low + high + 1) // 2
            if self.text_width(word[:mid], font_size, bold) <= max_width:
                low = mid
            else:
                high = mid - 1
        return low

    # --- shapes and images ---------------------------------------------

    def fill_rect(self, x: float, y: float, width: float, height: float, color: Color) -> None:
        self._current.draw_rect(
            fitz.Rect(x, y, x + width, y + height),
            color=None,
            fill=color,
            width=0,
        )

    def stroke_rect(
        self,
        x: float,
        y: float,
        width: float,
        height: float,
        color: Color = BLACK,
        line_width: float = 0.5,
    ) -> None:
        self._current.draw_rect(
            fitz.Rect(x, y, x + width, y + height),
            color=color,
            width=line_width,
        )

    def line(
        self,
        x1: float,
        y1: float,
        x2: float,
        y2: float,
        color: Color = BLACK,
        line_width: float = 1,
    ) -> None:
        self._current.draw_line(fitz.Point(x1, y1), fitz.Point(x2, y2), color=color, width=line_width)

    def add_image(self, image_bytes: bytes, x: float, y: float, width: float, height: float) -> None:
        """Embed an encoded raster image into the given box."""
        self._current.insert_image(
            fitz.Rect(x, y, x + width, y + height),
            stream=image_bytes,
            keep_proportion=False,
        )

    # --- output --------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Write the document to ``path``.

        Raises:
            WriteError: If the file cannot be written; a partial file is removed
        """
        path = Path(path)
        try:
            self.doc.save(str(path), garbage=3, deflate=True)
        except Exception as exc:
            # MuPDF surfaces I/O failures as several exception types
            if path.is_file():
                path.unlink()
            raise WriteError(f"Failed to write PDF to {path}: {exc}") from exc
        logger.info(f"Saved {self.page_count} pages to {path}")
        return path

    def close(self) -> None:
        self.doc.close()
