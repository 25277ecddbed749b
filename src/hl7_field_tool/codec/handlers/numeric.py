# src/hl7_field_tool/codec/handlers/numeric.py
"""
Numeric primitive types.

NM is an optionally signed decimal number and maps to decimal.Decimal. SI
(sequence ID) is a non-negative integer and maps to int.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from ..registry import register


@register("NM")
class NumericCodec:
    """Codec for NM values."""

    def decode(self, text: str) -> Optional[Decimal]:
        if text == "":
            return None
        try:
            value = Decimal(text.strip())
        except InvalidOperation as e:
            raise ValueError(f"Invalid NM value: {text!r}") from e
        if not value.is_finite():
            raise ValueError(f"Invalid NM value: {text!r}")
        return value

    def encode(self, value: Any) -> str:
        if value is None:
            return ""
        if isinstance(value, str):
            return value
        if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
            raise TypeError(f"NM value must be a number, got {type(value).__name__}")
        if isinstance(value, float):
            value = Decimal(str(value))
        return format(Decimal(value), "f")


@register("SI")
class SequenceIdCodec:
    """Codec for SI values."""

    def decode(self, text: str) -> Optional[int]:
        if text == "":
            return None
        if not text.isdigit():
            raise ValueError(f"Invalid SI value: {text!r}")
        return int(text)

    def encode(self, value: Any) -> str:
        if value is None:
            return ""
        if isinstance(value, str):
            return value
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"SI value must be int, got {type(value).__name__}")
        if value < 0:
            raise ValueError(f"SI value must be non-negative, got {value}")
        return str(value)
