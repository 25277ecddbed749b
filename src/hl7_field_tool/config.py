# src/hl7_field_tool/config.py
"""
Configuration utilities for hl7_field_tool.

Provides a simple dataclass-based configuration object and a loader that reads
YAML configuration files when present.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml


@dataclass(frozen=True)
class AppConfig:
    """
    Immutable application configuration.

    Attributes
    ----------
    default_version : str
        HL7 version whose data dictionary is used when none is given.
    tolerant : bool
        If True, component parse failures store the raw text instead of raising.
    encode_types : bool
        If True, leaf values are decoded/encoded through the type codec;
            otherwise raw ER7 text is kept.
    dictionary_dir : Path or None
        Directory holding additional ``v<major>_<minor>.yaml`` dictionaries.
    """

    default_version: str = "2.5"
    tolerant: bool = False
    encode_types: bool = True
    dictionary_dir: Optional[Path] = None


def _as_bool(data: Mapping[str, Any], key: str, default: bool) -> bool:
    value = data.get(key, default)
    if not isinstance(value, bool):
        raise TypeError(f"{key} must be bool, got {type(value).__name__}")
    return value


def load_config(path: Optional[Path]) -> AppConfig:
    """
    Load application configuration from a YAML file.

    Parameters
    ----------
    path : Path or None
        Path to a YAML config file. If None, defaults are used.

    Returns
    -------
    AppConfig
        The loaded configuration.

    Raises
    ------
    TypeError
        If the YAML file does not parse to a mapping at the top level, or a
        value has the wrong type.
    yaml.YAMLError
        If the file is not valid YAML.
    """
    if path is None:
        return AppConfig()

    data: Any = yaml.safe_load(path.read_text())

    if data is None:
        return AppConfig()

    if not isinstance(data, Mapping):
        raise TypeError(
            f"Config file must contain a mapping at top level, "
            f"got {type(data).__name__}. "
            f"Config file: {path}"
        )

    version = data.get("default_version", "2.5")
    if isinstance(version, (int, float)) and not isinstance(version, bool):
        # YAML reads 2.5 as a float
        version = str(version)
    if not isinstance(version, str):
        raise TypeError(f"default_version must be str, got {type(version).__name__}")

    dict_dir = data.get("dictionary_dir")
    return AppConfig(
        default_version=version,
        tolerant=_as_bool(data, "tolerant", False),
        encode_types=_as_bool(data, "encode_types", True),
        dictionary_dir=Path(dict_dir) if dict_dir is not None else None,
    )
