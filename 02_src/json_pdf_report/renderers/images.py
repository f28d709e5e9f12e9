"""Image row renderer: fetch remote images and place them one per row."""

import logging
from typing import Mapping, Optional

from ..core.classifier import FieldDescriptor
from ..core.fetcher import HttpFetcher, ImageFetchError
from ..core.layout import LayoutContext
from ..schemas.common import Diagnostic
from ..schemas.document import ImageRow
from ..utils.imaging import ImageDecodeError, to_jpeg
from .base import BaseRenderer

logger = logging.getLogger(__name__)

DEFAULT_X = 50
DEFAULT_WIDTH = 150
DEFAULT_HEIGHT = 100
# Space claimed before drawing when the row does not set its height
DEFAULT_RESERVE = 120
IMAGE_GAP = 20


class ImageRowRenderer(BaseRenderer):
    """Renders image-table fields.

    A row whose image cannot be fetched or decoded is skipped and
    recorded as a diagnostic; the remaining rows are still drawn.
    """

    def __init__(self, context: LayoutContext, fetcher: HttpFetcher, diagnostics=None):
        super().__init__(context, diagnostics)
        self.fetcher = fetcher

    def render(self, field: FieldDescriptor) -> None:
        drawn = 0
        for raw in field.value:
            if not isinstance(raw, Mapping):
                continue
            row = ImageRow.from_mapping(raw)
            if row is None:
                logger.debug(f"Row without url in '{field.key}', skipping")
                continue

            jpeg = self._load(field.key, row.url)
            if jpeg is None:
                continue
            self._place(row, jpeg)
            drawn += 1

        logger.debug(f"Image field '{field.key}': {drawn}/{len(field.value)} images drawn")

    def _load(self, key: str, url: str) -> Optional[bytes]:
        try:
            jpeg, _ = to_jpeg(self.fetcher.fetch_image(url))
            return jpeg
        except ImageFetchError as exc:
            self._skip("image_fetch", key, url, exc)
        except ImageDecodeError as exc:
            self._skip("image_decode", key, url, exc)
        return None

    def _skip(self, kind: str, key: str, url: str, exc: Exception) -> None:
        logger.warning(f"Skipping image {url} in '{key}': {exc}")
        self.diagnostics.append(Diagnostic(kind=kind, message=str(exc), field=key, url=url))

    def _place(self, row: ImageRow, jpeg: bytes) -> None:
        ctx = self.context
        width = row.width or DEFAULT_WIDTH
        height = row.height or DEFAULT_HEIGHT
        x = row.x if row.x is not None else DEFAULT_X
        offset = max(0.0, row.y or 0.0)

        needed = offset + height
        claim = needed if row.height else max(needed, DEFAULT_RESERVE)

        # Taller than a whole page: start a clean page and shrink to fit
        limit = ctx.usable_height - 1
        if claim > limit:
            if ctx.page_has_content:
                ctx.break_page()
            if offset >= limit:
                offset = 0.0
            scale = (limit - offset) / height
            width, height = width * scale, height * scale
            claim = offset + height
            logger.info(f"Image {row.url} scaled by {scale:.2f} to fit one page")

        top = ctx.reserve(claim)
        self.canvas.add_image(jpeg, x, top + offset, width, height)
        ctx.y = top + offset + height + IMAGE_GAP
