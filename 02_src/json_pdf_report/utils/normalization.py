"""JSON normalization: rebuild arbitrary input into a plain, acyclic tree."""

import math
from collections.abc import Mapping
from typing import Any, Set


class SerializationError(ValueError):
    """Raised when input data cannot be represented as JSON (e.g. a cycle)."""


_SCALARS = (str, int, float, bool, type(None))

# Marker for values that JSON serialization would drop
_DROP = object()


def normalize(value: Any) -> Any:
    """Deep-copy ``value`` into fresh dicts, lists and JSON scalars.

    Rules follow JSON serialization:
    - mappings become dicts with ``str`` keys, insertion order kept
    - lists and tuples become lists
    - non-finite floats become None
    - other values are dropped from mappings, become None inside lists
      and None at the root

    Args:
        value: Arbitrary data (typically parsed JSON)

    Returns:
        Normalized copy sharing no containers with the input

    Raises:
        SerializationError: If the data contains a reference cycle

    Examples:
        >>> normalize({"a": (1, 2), "b": float("nan")})
        {'a': [1, 2], 'b': None}
        >>> normalize({"f": print, "n": 1})
        {'n': 1}
    """
    result = _normalize(value, set())
    return None if result is _DROP else result


def _normalize(value: Any, active: Set[int]) -> Any:
    if isinstance(value, _SCALARS):
        if isinstance(value, float) and not math.isfinite(value):
            return None
        return value

    if isinstance(value, (Mapping, list, tuple)):
        marker = id(value)
        if marker in active:
            raise SerializationError(
                f"Cyclic reference detected in {type(value).__name__}"
            )
        active.add(marker)
        try:
            if isinstance(value, Mapping):
                result = {}
                for key, item in value.items():
                    cleaned = _normalize(item, active)
                    if cleaned is not _DROP:
                        result[str(key)] = cleaned
                return result
            return [
                None if cleaned is _DROP else cleaned
                for cleaned in (_normalize(item, active) for item in value)
            ]
        finally:
            active.discard(marker)

    return _DROP
