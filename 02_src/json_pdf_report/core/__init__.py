"""Core components: layout engine, canvas, furniture, fetching and orchestration."""

from .classifier import FieldKind, FieldDescriptor, classify_field, classify_value, iter_fields
from .canvas import PdfCanvas, WriteError, page_size
from .table_layout import GridTable
from .furniture import Furniture
from .layout import LayoutContext
from .fetcher import HttpFetcher, FetchError, ImageFetchError
from .generator import ReportGenerator, generate_pdf, agenerate_pdf

__all__ = [
    # Classification
    "FieldKind",
    "FieldDescriptor",
    "classify_field",
    "classify_value",
    "iter_fields",
    # Drawing
    "PdfCanvas",
    "WriteError",
    "page_size",
    "GridTable",
    "Furniture",
    "LayoutContext",
    # HTTP
    "HttpFetcher",
    "FetchError",
    "ImageFetchError",
    # Orchestration
    "ReportGenerator",
    "generate_pdf",
    "agenerate_pdf",
]
