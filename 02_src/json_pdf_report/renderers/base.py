"""Base renderer class."""

from abc import ABC, abstractmethod
from typing import List, Optional

from ..core.classifier import FieldDescriptor
from ..core.layout import LayoutContext
from ..schemas.common import Diagnostic


class BaseRenderer(ABC):
    """Abstract base class for field renderers.

    Renderers draw one classified field through the shared LayoutContext
    and append non-fatal problems to ``diagnostics``.
    """

    def __init__(self, context: LayoutContext, diagnostics: Optional[List[Diagnostic]] = None):
        """Initialize renderer.

        Args:
            context: Layout context of the current generation
            diagnostics: List collecting non-fatal problems
        """
        self.context = context
        self.canvas = context.canvas
        self.diagnostics = diagnostics if diagnostics is not None else []

    @abstractmethod
    def render(self, field: FieldDescriptor) -> None:
        """Draw the field at the cursor, advancing it."""
        pass
