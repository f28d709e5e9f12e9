"""Fixed decorative images (logos, stamps) drawn on the first page."""

import logging
from typing import List, Optional, Sequence

from ..core.canvas import PdfCanvas
from ..schemas.common import Diagnostic
from ..schemas.config import ImagePlacement
from ..utils.imaging import ImageDecodeError, to_jpeg

logger = logging.getLogger(__name__)


def draw_decorations(
    canvas: PdfCanvas,
    images: Sequence[ImagePlacement],
    diagnostics: Optional[List[Diagnostic]] = None,
) -> int:
    """Draw each placement at its absolute position on page 1.

    Unreadable files are skipped and recorded as diagnostics.

    Returns:
        Number of images drawn
    """
    if not images:
        return 0

    current = canvas.current_page_number
    canvas.set_page(1)
    drawn = 0
    for placement in images:
        try:
            jpeg, _ = to_jpeg(placement.path.read_bytes())
        except (OSError, ImageDecodeError) as exc:
            logger.warning(f"Skipping decorative image {placement.path}: {exc}")
            if diagnostics is not None:
                diagnostics.append(
                    Diagnostic(kind="decoration", message=str(exc), url=str(placement.path))
                )
            continue
        canvas.add_image(jpeg, placement.x, placement.y, placement.width, placement.height)
        drawn += 1

    canvas.set_page(current)
    logger.debug(f"Drew {drawn}/{len(images)} decorative images")
    return drawn
