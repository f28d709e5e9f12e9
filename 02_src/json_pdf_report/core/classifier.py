"""Field classification: decide how each document field is rendered."""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterator, List, Mapping

from ..schemas.document import Document

logger = logging.getLogger(__name__)


class FieldKind(str, Enum):
    """Rendering strategy for a document field."""

    TEXT = "text"
    TABLE = "table"
    IMAGE_TABLE = "imageTable"
    SKIP = "skip"


@dataclass(frozen=True)
class FieldDescriptor:
    """A classified field.

    Attributes:
        kind: Rendering strategy
        key: Field name
        value: Raw field value
    """
    kind: FieldKind
    key: str
    value: Any

    @property
    def columns(self) -> List[str]:
        """Table columns: the keys of the first row, in order."""
        if self.kind not in (FieldKind.TABLE, FieldKind.IMAGE_TABLE):
            return []
        return list(self.value[0].keys())


def classify_value(value: Any) -> FieldKind:
    """Classify a field value by its shape.

    Only the first element of a list is inspected.
    """
    if isinstance(value, str):
        return FieldKind.TEXT
    if isinstance(value, list) and value and isinstance(value[0], Mapping):
        return FieldKind.IMAGE_TABLE if "url" in value[0] else FieldKind.TABLE
    return FieldKind.SKIP


def classify_field(key: str, value: Any) -> FieldDescriptor:
    """Classify one field into a descriptor."""
    return FieldDescriptor(kind=classify_value(value), key=key, value=value)


def iter_fields(document: Document) -> Iterator[FieldDescriptor]:
    """Yield a descriptor per content field, in document order.

    Reserved header/footer keys are not part of ``document.fields``.
    """
    for key, value in document.fields.items():
        descriptor = classify_field(key, value)
        logger.debug(f"Field '{key}' classified as {descriptor.kind.value}")
        yield descriptor
