"""Small text helpers with C-like parsing rules."""

from __future__ import annotations

import re

_LEADING_INT = re.compile(r"[ \t\n\v\f\r]*([+-]?[0-9]+)")


def atoi(text: str | bytes) -> int:
    """Parse a leading decimal integer, ignoring what follows it.

    Leading whitespace and one sign are accepted; if no digits are found
    the result is 0.
    """
    if isinstance(text, (bytes, bytearray)):
        text = bytes(text).decode("latin-1")
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0