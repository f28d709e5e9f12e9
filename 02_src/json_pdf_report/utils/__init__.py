"""Utility helpers."""

from .normalization import normalize, SerializationError
from .imaging import to_jpeg, ImageDecodeError

__all__ = ["normalize", "SerializationError", "to_jpeg", "ImageDecodeError"]
