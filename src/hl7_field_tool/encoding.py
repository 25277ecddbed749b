# src/hl7_field_tool/encoding.py
"""
ER7 encoding characters.

The separator and escape characters are taken from hl7apy's defaults so that
this package and hl7apy-built messages agree on the wire format. Only two
separators matter for field decomposition, and which one applies is a
function of tree depth alone.
"""

from __future__ import annotations

from typing import Dict

from hl7apy.consts import DEFAULT_ENCODING_CHARS

FIELD_SEPARATOR: str = DEFAULT_ENCODING_CHARS["FIELD"]
COMPONENT_SEPARATOR: str = DEFAULT_ENCODING_CHARS["COMPONENT"]
SUBCOMPONENT_SEPARATOR: str = DEFAULT_ENCODING_CHARS["SUBCOMPONENT"]
REPETITION_SEPARATOR: str = DEFAULT_ENCODING_CHARS["REPETITION"]
ESCAPE_CHARACTER: str = DEFAULT_ENCODING_CHARS["ESCAPE"]

# Depth of a field's top level; its components are split on "^".
FIELD_DEPTH = 0
# Depth of components and everything below; split on "&".
SUBCOMPONENT_DEPTH = 1

# Delimiter -> escape letter, as in "\S\" for "^".
ESCAPE_SEQUENCES: Dict[str, str] = {
    ESCAPE_CHARACTER: "E",
    FIELD_SEPARATOR: "F",
    COMPONENT_SEPARATOR: "S",
    SUBCOMPONENT_SEPARATOR: "T",
    REPETITION_SEPARATOR: "R",
}


def separator_for_depth(depth: int) -> str:
    """Return the separator used to split a node at the given depth."""
    if not isinstance(depth, int):
        raise TypeError(f"depth must be int, got {type(depth).__name__}")
    if depth < FIELD_DEPTH:
        raise ValueError(f"depth must be non-negative, got {depth}")
    return COMPONENT_SEPARATOR if depth == FIELD_DEPTH else SUBCOMPONENT_SEPARATOR


def child_depth(depth: int) -> int:
    """Depth of the children of a node at ``depth`` (never below subcomponent)."""
    return min(depth + 1, SUBCOMPONENT_DEPTH)
