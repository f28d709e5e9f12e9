"""Data schemas for JSON PDF Report."""

from .document import Document, HeaderFooterSpec, ImageRow
from .common import Diagnostic, GenerationResult
from .config import PDFOptions, ImagePlacement, FetchConfig

__all__ = [
    "Document",
    "HeaderFooterSpec",
    "ImageRow",
    "Diagnostic",
    "GenerationResult",
    "PDFOptions",
    "ImagePlacement",
    "FetchConfig",
]
