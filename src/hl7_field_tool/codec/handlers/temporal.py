# src/hl7_field_tool/codec/handlers/temporal.py
"""
Date and time primitive types.

- DT  YYYY[MM[DD]]                              -> HL7Date (a datetime.date)
- TM  HH[MM[SS[.S[S[S[S]]]]]][+/-ZZZZ]           -> HL7Time (a datetime.time)
- DTM YYYY[MM[DD[HH[MM[SS[.S[S[S[S]]]]]]]]][+/-ZZZZ] -> HL7DateTime (a datetime.datetime)

Missing trailing parts default to their lowest value. Decoded values remember
the precision they were sent with (``precision`` = number of digits before the
fraction, ``fraction_digits`` = digits after the dot) and are written back at
that precision, so "202001" stays month-precise. Plain date/time/datetime
values have no recorded precision and are written out to seconds (DT: days),
plus fractional seconds when set and the UTC offset when timezone-aware.
Strings are passed through unchanged so that raw text kept by tolerant parsing
serializes as-is.
"""

from __future__ import annotations

import re
from datetime import date, datetime, time, timedelta, timezone, tzinfo
from typing import Any, Optional

from ..registry import register

_DT_RE = re.compile(r"^(\d{4})(\d{2})?(\d{2})?$")
_TM_RE = re.compile(r"^(\d{2})(\d{2})?(\d{2})?(?:\.(\d{1,4}))?([+-]\d{4})?$")
_DTM_RE = re.compile(
    r"^(\d{4})(\d{2})?(\d{2})?(\d{2})?(\d{2})?(\d{2})?(?:\.(\d{1,4}))?([+-]\d{4})?$"
)


class HL7Date(date):
    """A date decoded from DT text, with the precision of that text."""

    def __new__(cls, *args: Any, precision: Optional[int] = None, **kwargs: Any):
        self = super().__new__(cls, *args, **kwargs)
        self.precision = precision
        return self


class HL7Time(time):
    """A time decoded from TM text, with the precision of that text."""

    def __new__(
        cls,
        *args: Any,
        precision: Optional[int] = None,
        fraction_digits: int = 0,
        **kwargs: Any,
    ):
        self = super().__new__(cls, *args, **kwargs)
        self.precision = precision
        self.fraction_digits = fraction_digits
        return self


class HL7DateTime(datetime):
    """A datetime decoded from DTM/TS text, with the precision of that text."""

    def __new__(
        cls,
        *args: Any,
        precision: Optional[int] = None,
        fraction_digits: int = 0,
        **kwargs: Any,
    ):
        self = super().__new__(cls, *args, **kwargs)
        self.precision = precision
        self.fraction_digits = fraction_digits
        return self


def _offset(text: Optional[str]) -> Optional[tzinfo]:
    if not text:
        return None
    sign = -1 if text[0] == "-" else 1
    hours, minutes = int(text[1:3]), int(text[3:5])
    if hours > 23 or minutes > 59:
        raise ValueError(f"Invalid UTC offset: {text!r}")
    return timezone(sign * timedelta(hours=hours, minutes=minutes))


def _micro(fraction: Optional[str]) -> int:
    return int(fraction.ljust(6, "0")) if fraction else 0


def _digits(*groups: Optional[str]) -> int:
    return sum(len(g) for g in groups if g)


def _format_fraction(microsecond: int, digits: int = 0) -> str:
    if digits:
        return "." + f"{microsecond:06d}"[:digits]
    trimmed = f"{microsecond:06d}"[:4].rstrip("0")
    return "." + trimmed if trimmed else ""


def _format_offset(value: Any) -> str:
    delta = value.utcoffset()
    if delta is None:
        return ""
    sign = "-" if delta < timedelta(0) else "+"
    minutes = abs(int(delta.total_seconds())) // 60
    return f"{sign}{minutes // 60:02d}{minutes % 60:02d}"


def _format_precise(value: Any, full: str) -> str:
    """Cut the full digit string back to the value's recorded precision."""
    precision = getattr(value, "precision", None)
    if precision is None or precision >= len(full):
        digits = getattr(value, "fraction_digits", 0)
        return full + _format_fraction(value.microsecond, digits) + _format_offset(value)
    return full[:precision] + _format_offset(value)


@register("DT")
class DateCodec:
    """Codec for DT values."""

    def decode(self, text: str) -> Optional[date]:
        if text == "":
            return None
        m = _DT_RE.match(text)
        if not m:
            raise ValueError(f"Invalid DT value: {text!r}")
        year, month, day = m.groups()
        return HL7Date(
            int(year),
            int(month or 1),
            int(day or 1),
            precision=_digits(year, month, day),
        )

    def encode(self, value: Any) -> str:
        if value is None:
            return ""
        if isinstance(value, str):
            return value
        if isinstance(value, datetime):
            value = value.date()
        if not isinstance(value, date):
            raise TypeError(f"DT value must be a date, got {type(value).__name__}")
        full = value.strftime("%Y%m%d")
        precision = getattr(value, "precision", None)
        return full[:precision] if precision else full


@register("TM")
class TimeCodec:
    """Codec for TM values."""

    def decode(self, text: str) -> Optional[time]:
        if text == "":
            return None
        m = _TM_RE.match(text)
        if not m:
            raise ValueError(f"Invalid TM value: {text!r}")
        hh, mm, ss, frac, tz = m.groups()
        return HL7Time(
            int(hh),
            int(mm or 0),
            int(ss or 0),
            _micro(frac),
            tzinfo=_offset(tz),
            precision=_digits(hh, mm, ss),
            fraction_digits=len(frac or ""),
        )

    def encode(self, value: Any) -> str:
        if value is None:
            return ""
        if isinstance(value, str):
            return value
        if isinstance(value, datetime):
            value = value.timetz()
        if not isinstance(value, time):
            raise TypeError(f"TM value must be a time, got {type(value).__name__}")
        return _format_precise(value, value.strftime("%H%M%S"))


@register("DTM", "TS")
class DateTimeCodec:
    """Codec for DTM values (and TS when used as a primitive)."""

    def decode(self, text: str) -> Optional[datetime]:
        if text == "":
            return None
        m = _DTM_RE.match(text)
        if not m:
            raise ValueError(f"Invalid DTM value: {text!r}")
        year, month, day, hh, mi, ss, frac, tz = m.groups()
        return HL7DateTime(
            int(year),
            int(month or 1),
            int(day or 1),
            int(hh or 0),
            int(mi or 0),
            int(ss or 0),
            _micro(frac),
            tzinfo=_offset(tz),
            precision=_digits(year, month, day, hh, mi, ss),
            fraction_digits=len(frac or ""),
        )

    def encode(self, value: Any) -> str:
        if value is None:
            return ""
        if isinstance(value, str):
            return value
        if isinstance(value, datetime):
            return _format_precise(value, value.strftime("%Y%m%d%H%M%S"))
        if isinstance(value, date):
            full = value.strftime("%Y%m%d")
            precision = getattr(value, "precision", None)
            return full[:precision] if precision else full
        raise TypeError(f"DTM value must be a datetime, got {type(value).__name__}")
