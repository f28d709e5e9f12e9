"""Common data schemas."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional


@dataclass
class Diagnostic:
    """A non-fatal problem met during generation.

    Attributes:
        kind: Problem category ("image_fetch", "image_decode", "decoration")
        message: Human-readable description
        field: Document field being rendered, if any
        url: Image URL or file path involved, if any
    """
    kind: str
    message: str
    field: Optional[str] = None
    url: Optional[str] = None


@dataclass
class GenerationResult:
    """Result of a report generation.

    Attributes:
        path: Absolute path of the written PDF
        page_count: Number of pages in the PDF
        diagnostics: Non-fatal problems, in the order they occurred
    """
    path: Path
    page_count: int
    diagnostics: List[Diagnostic] = field(default_factory=list)
