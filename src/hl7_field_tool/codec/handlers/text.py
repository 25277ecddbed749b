# src/hl7_field_tool/codec/handlers/text.py
"""
Free-text primitive types (ST, TX, FT, ID, IS, ...).

Values are plain strings. Delimiters inside a value are written as HL7 escape
sequences (``\\S\\`` for the component separator and so on) and turned back
into the literal characters on decode. Formatting, hex and locally defined
escape sequences (``\\H\\``, ``\\.br\\``, ``\\X0D\\``, ``\\Zxx\\``, ...) are
not interpreted: decode leaves them in the value and encode writes them back
verbatim.
"""

from __future__ import annotations

import re
from typing import Any, Optional

from ...encoding import ESCAPE_CHARACTER, ESCAPE_SEQUENCES
from ..registry import register

_E = re.escape(ESCAPE_CHARACTER)
_UNESCAPE = {letter: char for char, letter in ESCAPE_SEQUENCES.items()}
_ESCAPE_RE = re.compile(_E + "([" + "".join(sorted(_UNESCAPE)) + "])" + _E)
# Escape sequences kept as-is: highlight on/off, formatting commands, hex data,
# character set switches and Z (site-defined) sequences.
_VERBATIM_RE = re.compile(
    _E
    + r"(?:H|N|\.[a-z]{2}[+-]?\d*|X(?:[0-9A-Fa-f]{2})+|[CM][0-9A-Fa-f]{4,6}|Z[0-9A-Za-z]*)"
    + _E
)


def _escape_chars(text: str) -> str:
    return "".join(
        f"{ESCAPE_CHARACTER}{ESCAPE_SEQUENCES[c]}{ESCAPE_CHARACTER}"
        if c in ESCAPE_SEQUENCES
        else c
        for c in text
    )


def escape(text: str) -> str:
    """
    Replace delimiter characters by their escape sequences.

    Well-formed formatting and hex sequences already present in the text are
    copied through unchanged.
    """
    out = []
    pos = 0
    for m in _VERBATIM_RE.finditer(text):
        out.append(_escape_chars(text[pos:m.start()]))
        out.append(m.group(0))
        pos = m.end()
    out.append(_escape_chars(text[pos:]))
    return "".join(out)


def unescape(text: str) -> str:
    """Replace delimiter escape sequences by the literal characters."""
    return _ESCAPE_RE.sub(lambda m: _UNESCAPE[m.group(1)], text)


@register("ST", "TX", "FT", "ID", "IS", "GTS", "varies")
class TextCodec:
    """Codec for string-valued types."""

    def decode(self, text: str) -> Optional[str]:
        if text == "":
            return None
        return unescape(text)

    def encode(self, value: Any) -> str:
        if value is None:
            return ""
        if not isinstance(value, str):
            value = str(value)
        return escape(value)
