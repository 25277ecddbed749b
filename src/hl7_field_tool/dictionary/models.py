# src/hl7_field_tool/dictionary/models.py
"""
Data dictionary models.

A version dictionary maps every data type code to its component layout.
Declarations are immutable pydantic models, so a cached dictionary can be
shared between fields without any risk of one field's schema leaking into
another's.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..exceptions import DictionaryError, UnknownDataTypeError


class ComponentDeclaration(BaseModel):
    """
    Schema fragment for one field or component.

    Attributes
    ----------
    dt : str
        Wire data type code (e.g., "ST", "CX").
    dt_mean : str or None
        Data type used for encode/decode when it differs from ``dt``.
        Read from/written to the ``dtMean`` key.
    desc : str
        Human-readable description; the component alias is derived from it.
    opt : str
        Optionality marker ("R", "O", "C", "B", "X", ...). Not enforced here.
    rep : str or None
        Repeatability marker. Not enforced here.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    dt: str = Field(min_length=1)
    dt_mean: Optional[str] = Field(default=None, alias="dtMean")
    desc: str = ""
    opt: str = "O"
    rep: Optional[str] = None

    @property
    def semantic_type(self) -> str:
        """Type code used by the codec."""
        return self.dt_mean or self.dt


class DataTypeEntry(BaseModel):
    """Dictionary entry for one data type; no components means primitive."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    desc: str = ""
    components: Optional[Tuple[ComponentDeclaration, ...]] = None

    @property
    def is_composite(self) -> bool:
        return bool(self.components)


def _coerce_entries(fields: Mapping[str, Any]) -> Dict[str, DataTypeEntry]:
    out: Dict[str, DataTypeEntry] = {}
    for code, entry in fields.items():
        if isinstance(entry, DataTypeEntry):
            out[str(code)] = entry
            continue
        try:
            out[str(code)] = DataTypeEntry.model_validate(entry or {})
        except ValidationError as e:
            raise DictionaryError(f"Invalid dictionary entry for {code}: {e}") from e
    return out


class VersionDictionary:
    """
    Read-only data dictionary for one HL7 version.

    Parameters
    ----------
    version : str
        HL7 version string, e.g. "2.5".
    fields : Mapping
        Data type code -> DataTypeEntry (or a raw mapping validated into one).
    """

    def __init__(self, version: str, fields: Mapping[str, Any]) -> None:
        if not isinstance(version, str):
            raise TypeError(f"version must be str, got {type(version).__name__}")
        if not isinstance(fields, Mapping):
            raise TypeError(f"fields must be a mapping, got {type(fields).__name__}")
        self.version = version
        self._fields: Mapping[str, DataTypeEntry] = MappingProxyType(
            _coerce_entries(fields)
        )

    def __repr__(self) -> str:
        return f"<VersionDictionary {self.version} ({len(self._fields)} types)>"

    def __contains__(self, code: object) -> bool:
        return code in self._fields

    def __len__(self) -> int:
        return len(self._fields)

    @property
    def fields(self) -> Mapping[str, DataTypeEntry]:
        return self._fields

    def lookup(self, code: str) -> DataTypeEntry:
        """
        Return the entry for a data type code.

        Raises
        ------
        UnknownDataTypeError
            If the code is not declared in this dictionary.
        """
        entry = self._fields.get(code)
        if entry is None:
            raise UnknownDataTypeError(code, self.version)
        return entry

    def merged(self, overrides: Optional[Mapping[str, Any]]) -> "VersionDictionary":
        """
        Return a copy with caller-supplied field declarations merged in.

        Parameters
        ----------
        overrides : Mapping or None
            Partial dictionary of the form ``{"fields": {code: entry, ...}}``.
            Override entries win on collision. This dictionary is left as is.

        Returns
        -------
        VersionDictionary
            ``self`` when there is nothing to merge, otherwise a new dictionary.
        """
        if not overrides:
            return self
        if not isinstance(overrides, Mapping):
            raise TypeError(
                f"overrides must be a mapping, got {type(overrides).__name__}"
            )
        extra = overrides.get("fields")
        if not extra:
            return self
        if not isinstance(extra, Mapping):
            raise TypeError(
                f"overrides['fields'] must be a mapping, got {type(extra).__name__}"
            )
        return VersionDictionary(self.version, {**self._fields, **extra})
