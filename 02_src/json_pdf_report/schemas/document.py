"""Document data schemas built from normalized JSON."""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from PIL import ImageColor

logger = logging.getLogger(__name__)

RESERVED_KEYS = ("header", "footer")
ALIGNMENTS = ("left", "center", "right")

RGB = Tuple[float, float, float]


def parse_color(color: Union[str, list, tuple, None], default: RGB = (0.0, 0.0, 0.0)) -> RGB:
    """Convert a CSS color string or 0-255 [r, g, b] list to 0-1 floats.

    Unparseable colors fall back to ``default``.
    """
    if color is None:
        return default
    try:
        if isinstance(color, str):
            rgb = ImageColor.getrgb(color)[:3]
        else:
            rgb = tuple(int(c) for c in list(color)[:3])
            if len(rgb) != 3:
                raise ValueError(f"expected 3 components, got {len(rgb)}")
    except (ValueError, TypeError) as exc:
        logger.warning(f"Ignoring invalid color {color!r}: {exc}")
        return default
    return tuple(max(0, min(255, c)) / 255 for c in rgb)


@dataclass
class HeaderFooterSpec:
    """Header or footer declared by the document.

    Attributes:
        text: Banner text (None = built-in default)
        align: "left", "center" or "right"
        font_size: Text size (None = furniture default)
        color: CSS color string or [r, g, b] with 0-255 components
    """
    text: Optional[str] = None
    align: str = "center"
    font_size: Optional[float] = None
    color: Union[str, list, None] = None

    @classmethod
    def from_value(cls, value: Any) -> Optional["HeaderFooterSpec"]:
        """Build header/footer settings from a reserved field value.

        A plain string is taken as the text; anything other than a string
        or mapping means "not declared".
        """
        if isinstance(value, str):
            return cls(text=value)
        if not isinstance(value, Mapping):
            return None

        align = str(value.get("align") or "center").lower()
        if align not in ALIGNMENTS:
            logger.warning(f"Unknown alignment '{align}', using center")
            align = "center"

        font_size = value.get("fontSize", value.get("font_size"))
        if not isinstance(font_size, (int, float)) or isinstance(font_size, bool) or font_size <= 0:
            font_size = None

        text = value.get("text")
        return cls(
            text=str(text) if text not in (None, "") else None,
            align=align,
            font_size=font_size,
            color=value.get("color"),
        )

    @property
    def rgb(self) -> RGB:
        return parse_color(self.color)


@dataclass
class ImageRow:
    """One row of an image table.

    Attributes:
        url: Remote image URL
        x, y: Optional position overrides (y is an offset from the cursor)
        width, height: Optional size overrides
    """
    url: str
    x: Optional[float] = None
    y: Optional[float] = None
    width: Optional[float] = None
    height: Optional[float] = None

    @classmethod
    def from_mapping(cls, row: Mapping[str, Any]) -> Optional["ImageRow"]:
        """Build an image row, or None when the row has no usable url."""
        url = row.get("url")
        if not url or not isinstance(url, str):
            return None

        def _number(key: str) -> Optional[float]:
            value = row.get(key)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                return None
            return float(value)

        return cls(
            url=url,
            x=_number("x"),
            y=_number("y"),
            width=_number("width") or None,
            height=_number("height") or None,
        )


@dataclass
class Document:
    """Normalized report document.

    Attributes:
        header: Declared header, None if absent (a default banner is drawn)
        footer: Declared footer, None if absent (no footer band is drawn)
        fields: Content fields in document order, reserved keys removed
        data: The full normalized tree
    """
    header: Optional[HeaderFooterSpec] = None
    footer: Optional[HeaderFooterSpec] = None
    fields: Dict[str, Any] = field(default_factory=dict)
    data: Any = None

    @classmethod
    def from_data(cls, data: Any) -> "Document":
        """Split a normalized tree into furniture and content fields."""
        if not isinstance(data, Mapping):
            logger.warning(
                f"Document root is {type(data).__name__}, not an object - "
                "no fields will be rendered"
            )
            return cls(data=data)

        return cls(
            header=HeaderFooterSpec.from_value(data.get("header")),
            footer=HeaderFooterSpec.from_value(data.get("footer")),
            fields={k: v for k, v in data.items() if k not in RESERVED_KEYS},
            data=data,
        )
