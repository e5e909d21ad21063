"""Positional message templates (``{0}``, ``{1}``, ...)."""

from __future__ import annotations

import re
from typing import Any, Sequence

from factalgebra.prettifier import Prettifier, default_prettifier

_PLACEHOLDER = re.compile(r"\{(\d+)\}")


class MessageFormatError(ValueError):
    """A template referenced an argument that was not supplied."""


def format_message(
    raw: str,
    args: Sequence[Any],
    prettifier: Prettifier = default_prettifier,
) -> str:
    """Fill the placeholders of *raw* with prettified *args*.

    With no args the template is returned verbatim, placeholders included.
    Substituted text is not scanned again for placeholders.
    """
    if not args:
        return raw

    rendered = [prettifier(arg) for arg in args]

    def _substitute(match: re.Match[str]) -> str:
        index = int(match.group(1))
        if index >= len(rendered):
            raise MessageFormatError(
                f"Template '{raw}' references {{{index}}} but only "
                f"{len(rendered)} argument(s) were supplied"
            )
        return rendered[index]

    return _PLACEHOLDER.sub(_substitute, raw)
