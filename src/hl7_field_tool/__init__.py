# src/hl7_field_tool/__init__.py
"""
hl7_field_tool: HL7 v2 field decomposition and encoding.

This package provides:
- Field trees built from per-version data dictionaries (field -> component
  -> subcomponent), with ER7 parsing and serialization.
- Type codecs for HL7 primitive data types (DT, DTM, TM, NM, SI, text).
- A CLI for inspecting and normalizing single fields.
"""

from __future__ import annotations

from .api import build_field, parse_field
from .exceptions import (
    ConfigurationError,
    DictionaryError,
    HL7FieldToolError,
    ParseError,
    UnknownDataTypeError,
)
from .node import FieldNode

__version__ = "0.1.0"
__all__ = [
    "ConfigurationError",
    "DictionaryError",
    "FieldNode",
    "HL7FieldToolError",
    "ParseError",
    "UnknownDataTypeError",
    "__version__",
    "build_field",
    "parse_field",
]
