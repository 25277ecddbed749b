# src/hl7_field_tool/api.py
"""
Convenience entry points.

Provides:
- build_field: an empty field tree for a data type and HL7 version,
- parse_field: the same, populated from ER7 text.

Defaults not given explicitly come from an AppConfig (or its defaults).
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

from .config import AppConfig
from .dictionary import ComponentDeclaration, load_dictionary
from .node import FieldNode
from .schema import SchemaResolver


def build_field(
    data_type: str,
    version: Optional[str] = None,
    *,
    overrides: Optional[Mapping[str, Any]] = None,
    tolerant: Optional[bool] = None,
    encode_types: Optional[bool] = None,
    config: Optional[AppConfig] = None,
    desc: Optional[str] = None,
    field: Any = None,
) -> FieldNode:
    """
    Build the node tree for a field of the given data type.

    Parameters
    ----------
    data_type : str
        Top-level data type code of the field, e.g. "CX".
    version : str or None
        HL7 version; defaults to ``config.default_version``.
    overrides : Mapping or None
        Partial dictionary ``{"fields": {...}}`` merged over the version
        dictionary for this tree only.
    tolerant, encode_types : bool or None
        Parsing options; default to the config values.
    config : AppConfig or None
        Source of defaults; ``AppConfig()`` if None.
    desc : str or None
        Description of the field itself; defaults to the data type code.
    field : Any
        Owning field object, stored as a back-reference on every node.

    Returns
    -------
    FieldNode
        Root node of the field tree.

    Raises
    ------
    TypeError
        If data_type is not a string.
    ValueError
        If data_type is empty.
    DictionaryError
        If no dictionary exists for the version.
    UnknownDataTypeError
        If data_type (or a nested type) is not in the dictionary.
    """
    if not isinstance(data_type, str):
        raise TypeError(f"data_type must be str, got {type(data_type).__name__}")
    if data_type.strip() == "":
        raise ValueError("data_type must be a non-empty string")

    cfg = config or AppConfig()
    dictionary = load_dictionary(version or cfg.default_version, cfg.dictionary_dir)
    resolver = SchemaResolver(dictionary, overrides)
    declaration = ComponentDeclaration(
        dt=data_type, desc=desc if desc is not None else data_type
    )
    return FieldNode(
        declaration,
        resolver,
        tolerant=cfg.tolerant if tolerant is None else tolerant,
        encode_types=cfg.encode_types if encode_types is None else encode_types,
        field=field,
    )


def parse_field(data_type: str, text: str, **kwargs: Any) -> FieldNode:
    """
    Build a field tree and parse ER7 text into it.

    Accepts the same keyword arguments as build_field.

    Raises
    ------
    ParseError
        If the text cannot be decoded and the tree is not tolerant.
    """
    node = build_field(data_type, **kwargs)
    node.parse(text)
    return node
