"""Text block renderer: a bold label followed by wrapped body lines."""

import logging

from ..core.classifier import FieldDescriptor
from ..core.layout import LayoutContext
from .base import BaseRenderer

logger = logging.getLogger(__name__)

LABEL_SPACE = 30
LINE_SPACE = 20
BLOCK_GAP = 20


class TextBlockRenderer(BaseRenderer):
    """Renders string fields line by line, breaking pages as needed."""

    def __init__(self, context: LayoutContext, font_size: float, diagnostics=None):
        super().__init__(context, diagnostics)
        self.font_size = font_size

    def render(self, field: FieldDescriptor) -> None:
        ctx = self.context

        y = ctx.ensure_space(LABEL_SPACE)
        self.canvas.text(f"{field.key.upper()}:", ctx.content_left, y, self.font_size, bold=True)
        ctx.mark_content()

        lines = self.canvas.split_text_to_size(field.value, ctx.content_width, self.font_size)
        for line in lines:
            y = ctx.ensure_space(LINE_SPACE)
            if line:
                self.canvas.text(line, ctx.content_left, y, self.font_size)
            ctx.mark_content()

        ctx.advance(BLOCK_GAP)
        logger.debug(f"Text field '{field.key}': {len(lines)} lines, cursor at {ctx.y:.0f}")
