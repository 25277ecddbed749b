# src/hl7_field_tool/dictionary/__init__.py
"""
HL7 v2 data dictionaries.

Dictionaries are YAML files named ``v<major>_<minor>[_<patch>].yaml`` with a
top-level ``fields`` mapping of data type code to entry::

    fields:
      HD:
        desc: Hierarchic Designator
        components:
          - {dt: IS, desc: namespaceId, opt: O}
          - {dt: ST, desc: universalId, opt: C}

Bundled dictionaries live next to this module; callers may point at an extra
directory whose files take precedence over the bundled ones.

Loaded dictionaries are cached per (version, directory) and are read-only.
"""

from __future__ import annotations

import logging
import re
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any, List, Optional

import yaml

from ..exceptions import DictionaryError
from .models import ComponentDeclaration, DataTypeEntry, VersionDictionary

LOG = logging.getLogger(__name__)

_FILE_RE = re.compile(r"^v(\d+(?:_\d+)*)\.ya?ml$")


def _file_stem(version: str) -> str:
    return "v" + version.replace(".", "_")


def _version_of(name: str) -> Optional[str]:
    m = _FILE_RE.match(name)
    return m.group(1).replace("_", ".") if m else None


def _read_text(version: str, directory: Optional[Path]) -> str:
    stem = _file_stem(version)
    if directory is not None:
        for suffix in (".yaml", ".yml"):
            candidate = directory / f"{stem}{suffix}"
            if candidate.is_file():
                LOG.debug("Reading HL7 %s dictionary from %s", version, candidate)
                return candidate.read_text(encoding="utf-8")
    bundled = resources.files(__name__).joinpath(f"{stem}.yaml")
    if bundled.is_file():
        LOG.debug("Reading bundled HL7 %s dictionary", version)
        return bundled.read_text(encoding="utf-8")
    raise DictionaryError(f"No data dictionary for HL7 version {version}")


def parse_dictionary(version: str, text: str) -> VersionDictionary:
    """
    Build a VersionDictionary from YAML text.

    Raises
    ------
    DictionaryError
        If the text is not valid YAML or does not have the expected shape.
    """
    try:
        data: Any = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise DictionaryError(f"Invalid YAML in HL7 {version} dictionary: {e}") from e
    if not isinstance(data, dict) or not isinstance(data.get("fields"), dict):
        raise DictionaryError(
            f"HL7 {version} dictionary must contain a 'fields' mapping at top level"
        )
    return VersionDictionary(version, data["fields"])


@lru_cache(maxsize=None)
def _load_cached(version: str, directory: Optional[Path]) -> VersionDictionary:
    dictionary = parse_dictionary(version, _read_text(version, directory))
    LOG.debug("Loaded HL7 %s dictionary with %d data types", version, len(dictionary))
    return dictionary


def load_dictionary(
    version: str, directory: Optional[Path] = None
) -> VersionDictionary:
    """
    Load (and cache) the data dictionary for an HL7 version.

    Parameters
    ----------
    version : str
        HL7 version, e.g. "2.5".
    directory : Path or None
        Extra directory searched before the bundled dictionaries.

    Returns
    -------
    VersionDictionary
        Shared, read-only dictionary.

    Raises
    ------
    TypeError
        If version is not a string.
    DictionaryError
        If no dictionary exists for the version or it is invalid.
    """
    if not isinstance(version, str):
        raise TypeError(f"version must be str, got {type(version).__name__}")
    if version.strip() == "":
        raise ValueError("version must be a non-empty string")
    return _load_cached(version.strip(), directory)


def available_versions(directory: Optional[Path] = None) -> List[str]:
    """
    List HL7 versions with a loadable dictionary.

    Returns
    -------
    List[str]
        Sorted version strings (e.g., ["2.5"]).
    """
    found = set()
    for entry in resources.files(__name__).iterdir():
        v = _version_of(entry.name)
        if v:
            found.add(v)
    if directory is not None and directory.is_dir():
        for entry in directory.iterdir():
            v = _version_of(entry.name)
            if v:
                found.add(v)
    return sorted(found, key=lambda v: [int(p) for p in v.split(".")])


def clear_cache() -> None:
    """Drop all cached dictionaries (e.g., after editing a dictionary file)."""
    _load_cached.cache_clear()


__all__ = [
    "ComponentDeclaration",
    "DataTypeEntry",
    "VersionDictionary",
    "available_versions",
    "clear_cache",
    "load_dictionary",
    "parse_dictionary",
]
