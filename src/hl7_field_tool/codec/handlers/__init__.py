# src/hl7_field_tool/codec/handlers/__init__.py
"""
Bundled codecs for HL7 primitive data types.

Each public module here registers its codec classes with @register(...) at
import time. load_all() imports them and reports which data type codes each
module contributed; modules whose name starts with "_" are skipped.
"""

from __future__ import annotations

import importlib
import logging
import pkgutil
from typing import Dict, Iterable, List, Set

from ..registry import available_types

LOG = logging.getLogger(__name__)

_DISCOVERED: Set[str] = set()


def _iter_modules(pkg_name: str) -> Iterable[str]:
    """Yield fully-qualified module names under the given package."""
    pkg = importlib.import_module(pkg_name)
    pkg_path = getattr(pkg, "__path__", None)
    if not pkg_path:
        return
    for _, name, _ in pkgutil.walk_packages(pkg_path, prefix=pkg_name + "."):
        yield name


def load_all() -> Dict[str, List[str]]:
    """
    Import every codec module not imported yet.

    Returns
    -------
    Dict[str, List[str]]
        Module name -> data type codes it registered, for the modules imported
        by this call only. Repeated calls return an empty mapping.
    """
    loaded: Dict[str, List[str]] = {}
    for modname in _iter_modules(__name__):
        if modname in _DISCOVERED:
            continue
        if modname.rsplit(".", 1)[-1].startswith("_"):
            continue
        before = set(available_types())
        importlib.import_module(modname)
        _DISCOVERED.add(modname)
        loaded[modname] = sorted(set(available_types()) - before)
        LOG.debug("Codec module %s registered %s", modname, loaded[modname] or "nothing")
    return loaded


__all__ = ["load_all"]
