# src/hl7_field_tool/codec/__init__.py
"""
Type codecs for HL7 v2 leaf values.

Importing this package registers every codec under ``codec.handlers``, so
``encode``/``decode`` are usable right away.
"""

from __future__ import annotations

from .base import TypeCodec
from .handlers import load_all as _load_handlers
from .registry import available_types, decode, encode, get_codec, register

# Idempotent; safe if tests/CLI import this multiple times.
_load_handlers()

__all__ = [
    "TypeCodec",
    "available_types",
    "decode",
    "encode",
    "get_codec",
    "register",
]
