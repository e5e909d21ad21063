"""Display strings for message arguments."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Set
from typing import Any, Callable

Prettifier = Callable[[Any], str]


def default_prettifier(value: Any) -> str:
    """Render *value* for inclusion in a failure message.

    Strings are double-quoted, collections are bracketed with their elements
    prettified recursively, everything else uses ``str``.
    """
    if value is None:
        return "None"
    if isinstance(value, str):
        return f'"{value}"'
    if isinstance(value, (bool, int, float, complex)):
        return str(value)
    if isinstance(value, Mapping):
        items = ", ".join(
            f"{default_prettifier(k)}: {default_prettifier(v)}" for k, v in value.items()
        )
        return "{" + items + "}"
    if isinstance(value, Set):
        return "{" + ", ".join(default_prettifier(v) for v in value) + "}"
    if isinstance(value, Iterable) and not isinstance(value, (bytes, bytearray)):
        return "[" + ", ".join(default_prettifier(v) for v in value) + "]"
    return str(value)


def identity_prettifier(value: Any) -> str:
    return str(value)
