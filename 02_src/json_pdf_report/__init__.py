"""JSON PDF Report - render arbitrary JSON documents as paginated PDF reports.

Each top-level field is rendered by shape:
- strings become labelled text blocks
- arrays of objects become grid tables
- arrays of objects with a ``url`` key become image rows
"""

__version__ = "0.1.0"

# Entry points
from .core.generator import ReportGenerator, generate_pdf, agenerate_pdf

# Core classes
from .core.fetcher import HttpFetcher
from .core.canvas import PdfCanvas
from .core.layout import LayoutContext
from .core.classifier import FieldKind, classify_field

# Errors
from .core.fetcher import FetchError, ImageFetchError
from .core.canvas import WriteError
from .utils.normalization import SerializationError, normalize

# Schemas
from .schemas.config import PDFOptions, ImagePlacement, FetchConfig
from .schemas.document import Document, HeaderFooterSpec
from .schemas.common import Diagnostic, GenerationResult

__all__ = [
    # Version
    "__version__",

    # Entry points
    "ReportGenerator",
    "generate_pdf",
    "agenerate_pdf",

    # Core classes
    "HttpFetcher",
    "PdfCanvas",
    "LayoutContext",
    "FieldKind",
    "classify_field",
    "normalize",

    # Errors
    "FetchError",
    "ImageFetchError",
    "WriteError",
    "SerializationError",

    # Schemas
    "PDFOptions",
    "ImagePlacement",
    "FetchConfig",
    "Document",
    "HeaderFooterSpec",
    "Diagnostic",
    "GenerationResult",
]
