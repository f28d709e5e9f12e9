"""ReportGenerator - turns a JSON document into a paginated PDF report."""

import asyncio
import json
import logging
import time
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from ..renderers import (
    ImageRowRenderer,
    TableRenderer,
    TextBlockRenderer,
    draw_decorations,
    stamp_page_numbers,
)
from ..schemas.common import Diagnostic, GenerationResult
from ..schemas.config import PDFOptions
from ..schemas.document import Document
from ..utils.normalization import normalize
from .canvas import PdfCanvas, WriteError
from .classifier import FieldKind, iter_fields
from .fetcher import FetchError, HttpFetcher
from .furniture import Furniture
from .layout import LayoutContext

logger = logging.getLogger(__name__)

Source = Union[str, Path, Dict[str, Any], List[Any]]

FILE_SUFFIXES = {".json", ".yaml", ".yml"}


def _is_url(value: str) -> bool:
    return value.startswith(("http://", "https://"))


class ReportGenerator:
    """Builds one report per ``generate()`` call.

    Supports:
    - in-memory data (dict or list)
    - a URL returning JSON
    - a local .json / .yaml file

    Each call owns its canvas and layout context; nothing is shared
    between calls.
    """

    def __init__(
        self,
        source: Source,
        options: Union[PDFOptions, Dict[str, Any], None] = None,
        fetcher: Optional[HttpFetcher] = None,
    ):
        """Initialize generator.

        Args:
            source: Data, URL or file path
            options: Layout options (dict keys may be camelCase)
            fetcher: HTTP fetcher (optional, created from environment if not provided)
        """
        if isinstance(options, dict):
            options = PDFOptions.from_dict(options)
        self.source = source
        self.options = options or PDFOptions()
        self.fetcher = fetcher or HttpFetcher()
        # A fetcher built here is closed after each generate() call
        self._owns_fetcher = fetcher is None
        self.diagnostics: List[Diagnostic] = []

    def _read_source(self) -> Any:
        source = self.source

        if isinstance(source, str) and _is_url(source):
            return self.fetcher.fetch_json(source)

        if isinstance(source, Path) or (
            isinstance(source, str) and Path(source).suffix.lower() in FILE_SUFFIXES
        ):
            return self._read_file(Path(source))

        if isinstance(source, str):
            # Anything else string-like is handed to HTTP and fails there
            return self.fetcher.fetch_json(source)

        return source

    def _read_file(self, path: Path) -> Any:
        logger.info(f"Loading document from {path}")
        try:
            text = path.read_text(encoding="utf-8")
            if path.suffix.lower() in (".yaml", ".yml"):
                return yaml.safe_load(text)
            return json.loads(text)
        except (OSError, ValueError, yaml.YAMLError) as exc:
            raise FetchError(f"Cannot read document {path}: {exc}") from exc

    def load(self) -> Document:
        """Read and normalize the source into a Document.

        Raises:
            FetchError: If the source cannot be fetched or read
            SerializationError: If the data contains a cycle
        """
        document = Document.from_data(normalize(self._read_source()))
        logger.info(
            f"Document loaded: {len(document.fields)} fields "
            f"(header: {document.header is not None}, footer: {document.footer is not None})"
        )
        return document

    def _output_path(self) -> Path:
        output_dir = self.options.output_dir or Path.cwd()
        try:
            output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise WriteError(f"Cannot create output directory {output_dir}: {exc}") from exc
        return (output_dir / f"report-{int(time.time() * 1000)}.pdf").resolve()

    def generate(self) -> GenerationResult:
        """Lay out the document and write the PDF.

        Returns:
            GenerationResult with path, page count and diagnostics

        Raises:
            FetchError, SerializationError, WriteError
        """
        try:
            return self._generate()
        finally:
            if self._owns_fetcher:
                self.fetcher.close()

    def _generate(self) -> GenerationResult:
        self.diagnostics = []
        document = self.load()
        options = self.options

        canvas = PdfCanvas(options.format, options.orientation, options.font_type)
        try:
            furniture = Furniture(canvas, document.header, document.footer, options.font_size)
            context = LayoutContext(canvas, furniture)
            context.begin()
            draw_decorations(canvas, options.images, self.diagnostics)

            renderers = {
                FieldKind.TEXT: TextBlockRenderer(context, options.font_size, self.diagnostics),
                FieldKind.TABLE: TableRenderer(context, self.diagnostics),
                FieldKind.IMAGE_TABLE: ImageRowRenderer(context, self.fetcher, self.diagnostics),
            }
            for field in iter_fields(document):
                renderer = renderers.get(field.kind)
                if renderer is None:
                    logger.debug(f"Skipping field '{field.key}'")
                    continue
                renderer.render(field)

            furniture.complete_footers()
            if options.page_numbering:
                stamp_page_numbers(canvas)

            page_count = canvas.page_count
            path = canvas.save(self._output_path())
        finally:
            canvas.close()

        logger.info(
            f"PDF created: {path} ({page_count} pages, "
            f"{len(self.diagnostics)} diagnostics)"
        )
        return GenerationResult(path=path, page_count=page_count, diagnostics=list(self.diagnostics))


def generate_pdf(
    source: Source,
    options: Union[PDFOptions, Dict[str, Any], None] = None,
    fetcher: Optional[HttpFetcher] = None,
) -> str:
    """Generate a PDF report and return its absolute path.

    Args:
        source: In-memory data, a URL returning JSON, or a .json/.yaml file
        options: Layout options
        fetcher: HTTP fetcher (optional)

    Returns:
        Absolute path of the written report as a string

    Raises:
        FetchError: If the document cannot be fetched
        SerializationError: If the data contains a cycle
        WriteError: If the PDF cannot be written
    """
    try:
        result = ReportGenerator(source, options, fetcher).generate()
    except Exception as exc:
        logger.exception(f"Error generating PDF: {exc}")
        raise
    return str(result.path)


async def agenerate_pdf(
    source: Source,
    options: Union[PDFOptions, Dict[str, Any], None] = None,
    fetcher: Optional[HttpFetcher] = None,
) -> str:
    """Async variant of ``generate_pdf``; runs the generation in a worker thread."""
    return await asyncio.to_thread(generate_pdf, source, options, fetcher)
