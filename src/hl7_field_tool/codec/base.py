# src/hl7_field_tool/codec/base.py
"""
Codec protocol for HL7 v2 primitive data types.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

__all__ = ["TypeCodec"]


@runtime_checkable
class TypeCodec(Protocol):
    """
    Interface for primitive data type codecs.

    Implementations convert between the ER7 wire text of a single leaf value
    and a richer Python value (date, Decimal, ...). Both directions must
    accept the empty case: "" decodes to None and None encodes to "".
    """

    def decode(self, text: str) -> Any:
        """
        Convert ER7 text into a Python value.

        Parameters
        ----------
        text : str
            Wire text of one leaf, already split out of its component.

        Returns
        -------
        Any
            The decoded value, or None for empty text.

        Raises
        ------
        ValueError
            If the text is not valid for the data type.
        """
        ...

    def encode(self, value: Any) -> str:
        """
        Convert a Python value into ER7 text.

        Parameters
        ----------
        value : Any
            Value previously produced by decode, or supplied by a caller.

        Returns
        -------
        str
            ER7 text with delimiters escaped where the type allows free text.

        Raises
        ------
        TypeError
            If the value cannot be represented in this data type.
        """
        ...
