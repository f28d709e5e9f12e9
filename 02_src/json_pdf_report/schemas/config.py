"""Configuration schemas for report generation and HTTP fetching."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

PAGE_FORMATS = ("a4", "letter", "legal")
ORIENTATIONS = ("portrait", "landscape")
FONT_TYPES = ("times", "helvetica", "courier")


@dataclass
class ImagePlacement:
    """A fixed image drawn on the first page.

    Attributes:
        path: Local image file (any format Pillow can decode)
        x: Left edge in points
        y: Top edge in points
        width: Drawn width in points
        height: Drawn height in points
    """
    path: Path
    x: float
    y: float
    width: float
    height: float

    def __post_init__(self):
        self.path = Path(self.path)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ImagePlacement":
        return cls(
            path=data["path"],
            x=float(data.get("x", 0)),
            y=float(data.get("y", 0)),
            width=float(data["width"]),
            height=float(data["height"]),
        )


@dataclass
class PDFOptions:
    """Layout options for a generated report.

    Attributes:
        format: Page format - "a4", "letter" or "legal"
        orientation: "portrait" or "landscape"
        font_type: Base font family - "times", "helvetica" or "courier"
        font_size: Body font size in points
        page_numbering: Stamp "Page i of N" on every page
        images: Decorative images drawn on the first page
        output_dir: Directory for the report file (None = current directory)
    """
    format: str = "a4"
    orientation: str = "portrait"
    font_type: str = "times"
    font_size: float = 14
    page_numbering: bool = True
    images: List[ImagePlacement] = field(default_factory=list)
    output_dir: Optional[Path] = None

    def __post_init__(self):
        """Validate choices and coerce nested values."""
        self.format = self.format.lower()
        self.orientation = self.orientation.lower()
        if self.format not in PAGE_FORMATS:
            raise ValueError(
                f"Unsupported page format '{self.format}' "
                f"(expected one of {', '.join(PAGE_FORMATS)})"
            )
        if self.orientation not in ORIENTATIONS:
            raise ValueError(
                f"Unsupported orientation '{self.orientation}' "
                f"(expected one of {', '.join(ORIENTATIONS)})"
            )
        if self.font_size <= 0:
            raise ValueError(f"font_size must be positive, got {self.font_size}")
        self.images = [
            img if isinstance(img, ImagePlacement) else ImagePlacement.from_dict(img)
            for img in self.images
        ]
        if self.output_dir is not None:
            self.output_dir = Path(self.output_dir)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PDFOptions":
        """Build options from a dict, accepting camelCase keys too.

        Example:
            >>> PDFOptions.from_dict({"fontType": "courier", "pageNumbering": False})
        """
        aliases = {
            "fontType": "font_type",
            "fontSize": "font_size",
            "pageNumbering": "page_numbering",
            "outputDir": "output_dir",
        }
        kwargs = {aliases.get(key, key): value for key, value in data.items()}
        return cls(**kwargs)


@dataclass
class FetchConfig:
    """Configuration for the HTTP fetcher.

    Attributes:
        timeout_sec: Request timeout in seconds
            (env JSON_PDF_FETCH_TIMEOUT if not provided)
        max_retries: Maximum number of attempts per request
        backoff_base: Base for exponential backoff calculation
        auth_token: Bearer token sent with every request
            (env JSON_PDF_AUTH_TOKEN if not provided)
    """
    timeout_sec: Optional[float] = None
    max_retries: int = 3
    backoff_base: float = 1.5
    auth_token: Optional[str] = None

    def __post_init__(self):
        """Load timeout and token from environment if not provided."""
        if self.timeout_sec is None:
            self.timeout_sec = float(os.getenv("JSON_PDF_FETCH_TIMEOUT", "30"))
        if self.auth_token is None:
            self.auth_token = os.getenv("JSON_PDF_AUTH_TOKEN") or None
        if self.max_retries < 1:
            raise ValueError(f"max_retries must be >= 1, got {self.max_retries}")
