"""Root conftest - loads .env, shared fixtures for canvases, images and fetchers."""

import io
import logging
from pathlib import Path
from typing import Callable, Dict, List
from unittest.mock import Mock

import fitz
import pytest
from dotenv import load_dotenv
from PIL import Image

from json_pdf_report.core.canvas import PdfCanvas
from json_pdf_report.core.fetcher import HttpFetcher, ImageFetchError
from json_pdf_report.core.furniture import Furniture
from json_pdf_report.core.layout import LayoutContext
from json_pdf_report.schemas.document import HeaderFooterSpec

load_dotenv()

logging.getLogger("json_pdf_report").setLevel(logging.DEBUG)


def make_image(fmt: str = "JPEG", size=(40, 30), color="red", mode: str = "RGB") -> bytes:
    """Encode a solid-color test image."""
    img = Image.new(mode, size, color=color)
    buf = io.BytesIO()
    img.save(buf, format=fmt)
    return buf.getvalue()


def read_pages(pdf_path) -> List[str]:
    """Extract the text of every page of a PDF."""
    doc = fitz.open(pdf_path)
    try:
        return [page.get_text() for page in doc]
    finally:
        doc.close()


@pytest.fixture
def jpeg_bytes() -> bytes:
    return make_image("JPEG")


@pytest.fixture
def png_bytes() -> bytes:
    return make_image("PNG", mode="RGBA", color=(0, 128, 255, 128))


@pytest.fixture
def image_fetcher(jpeg_bytes: bytes) -> Callable[[Dict[str, bytes]], Mock]:
    """Factory for a fetcher mock serving images by URL.

    URLs missing from the mapping raise ImageFetchError.
    """

    def _make(images: Dict[str, bytes] = None) -> Mock:
        images = images if images is not None else {}

        def fetch_image(url: str) -> bytes:
            if url not in images:
                raise ImageFetchError(f"GET {url} failed: 404 Not Found")
            return images[url]

        fetcher = Mock(spec=HttpFetcher)
        fetcher.fetch_image.side_effect = fetch_image
        return fetcher

    return _make


@pytest.fixture
def canvas():
    """A4 portrait canvas, closed after the test."""
    c = PdfCanvas("a4", "portrait", "times")
    yield c
    c.close()


@pytest.fixture
def make_context(canvas: PdfCanvas):
    """Factory for a started LayoutContext on the shared canvas."""

    def _make(header=None, footer=None, font_size: float = 14) -> LayoutContext:
        furniture = Furniture(canvas, header, footer, font_size)
        ctx = LayoutContext(canvas, furniture)
        ctx.begin()
        return ctx

    return _make


@pytest.fixture
def context(make_context) -> LayoutContext:
    return make_context(footer=HeaderFooterSpec(text="Footer"))


@pytest.fixture
def in_tmp_cwd(tmp_path: Path, monkeypatch) -> Path:
    """Run the test with the working directory set to tmp_path."""
    monkeypatch.chdir(tmp_path)
    return tmp_path
