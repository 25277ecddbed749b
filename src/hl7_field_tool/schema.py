# src/hl7_field_tool/schema.py
"""
Schema resolution for field trees.

Provides:
- SchemaResolver: component declarations for a data type code, with caller
  overrides merged into a private copy of the version dictionary,
- alias_for: the accessor name derived from a component description.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional, Tuple

from .dictionary import ComponentDeclaration, VersionDictionary

# Composite types whose first slot is documented as ST but always carries a
# date/time.
TIMESTAMP_TYPES = frozenset({"TS"})
TIMESTAMP_VALUE_TYPE = "DTM"

Components = Tuple[ComponentDeclaration, ...]


def alias_for(desc: str) -> str:
    """Return the accessor alias for a description: first letter upper-cased."""
    return desc[:1].upper() + desc[1:]


class SchemaResolver:
    """
    Resolve data type codes to their component declarations.

    Parameters
    ----------
    dictionary : VersionDictionary
        Shared dictionary for the message version. It is never modified.
    overrides : Mapping or None
        Partial dictionary ``{"fields": {...}}`` merged over ``dictionary``.
        The merge happens once, into a copy owned by this resolver.
    """

    def __init__(
        self,
        dictionary: VersionDictionary,
        overrides: Optional[Mapping[str, Any]] = None,
    ) -> None:
        if not isinstance(dictionary, VersionDictionary):
            raise TypeError(
                f"dictionary must be VersionDictionary, got {type(dictionary).__name__}"
            )
        self.dictionary = dictionary.merged(overrides)

    @property
    def version(self) -> str:
        return self.dictionary.version

    def resolve(self, data_type: str) -> Optional[Components]:
        """
        Return the component declarations of a data type, or None for a leaf.

        Raises
        ------
        UnknownDataTypeError
            If the code is not in the dictionary.
        """
        entry = self.dictionary.lookup(data_type)
        if not entry.components:
            return None
        components = entry.components
        first = components[0]
        if data_type in TIMESTAMP_TYPES and first.dt == "ST":
            first = ComponentDeclaration(
                dt=first.dt,
                dt_mean=TIMESTAMP_VALUE_TYPE,
                desc=first.desc,
                opt=first.opt,
                rep=first.rep,
            )
            components = (first,) + components[1:]
        return components
