# src/hl7_field_tool/codec/registry.py
"""
Registry for HL7 v2 primitive type codecs.

Provides:
- a @register(*type_codes) decorator to bind data type codes to codec classes,
- lookup by type code with a text fallback for unregistered codes,
- listing of registered codes,
- the module-level encode/decode pair used by field nodes.
"""

from __future__ import annotations

from typing import Any, Dict, List, Type

from .base import TypeCodec

# Map HL7 data type code (e.g., "DTM") to a codec class.
_REGISTRY: Dict[str, Type[TypeCodec]] = {}

# Codes without a dedicated codec are handled as escaped free text.
FALLBACK_TYPE = "ST"


def register(*type_codes: str):
    """
    Decorator to register a TypeCodec class for one or more data type codes.

    Parameters
    ----------
    *type_codes : str
        HL7 data type codes, e.g., "NM" or "ST", "TX".

    Raises
    ------
    ValueError
        If no code is given or a code is already registered.
    TypeError
        If the decorated object is not a class implementing TypeCodec.

    Returns
    -------
    callable
        A class decorator that registers the codec.
    """
    if not type_codes:
        raise ValueError("register() needs at least one data type code")

    def _wrap(cls: Type[TypeCodec]) -> Type[TypeCodec]:
        if not isinstance(cls, type):
            raise TypeError(f"Only classes can be registered as codecs, got {type(cls)}")
        if not callable(getattr(cls, "decode", None)) or not callable(
            getattr(cls, "encode", None)
        ):
            raise TypeError(f"Class {cls.__name__} does not implement TypeCodec protocol")
        for code in type_codes:
            if code in _REGISTRY:
                raise ValueError(f"Codec already registered for data type {code!r}")
        for code in type_codes:
            _REGISTRY[code] = cls
        return cls

    return _wrap


def available_types() -> List[str]:
    """
    List all data type codes with a registered codec.

    Returns
    -------
    List[str]
        Sorted list of codes (e.g., ["DT", "DTM", "FT", ...]).
    """
    return sorted(_REGISTRY.keys())


def get_codec(type_code: str) -> TypeCodec:
    """
    Look up and instantiate the codec for a data type code.

    Unregistered codes fall back to the free-text codec so that unknown
    primitive types still round-trip as text.

    Parameters
    ----------
    type_code : str
        HL7 data type code.

    Returns
    -------
    TypeCodec
        Codec instance for the code.

    Raises
    ------
    TypeError
        If type_code is not a string.
    """
    if not isinstance(type_code, str):
        raise TypeError(f"type_code must be str, got {type(type_code).__name__}")
    cls = _REGISTRY.get(type_code) or _REGISTRY[FALLBACK_TYPE]
    return cls()


def decode(text: str, type_code: str) -> Any:
    """Decode ER7 text of one leaf according to ``type_code``."""
    if not isinstance(text, str):
        raise TypeError(f"text must be str, got {type(text).__name__}")
    return get_codec(type_code).decode(text)


def encode(value: Any, type_code: str) -> str:
    """Encode one leaf value to ER7 text according to ``type_code``."""
    return get_codec(type_code).encode(value)
