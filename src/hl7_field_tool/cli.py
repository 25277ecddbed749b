# src/hl7_field_tool/cli.py
"""
Command-line interface for hl7_field_tool.

Subcommands
-----------
parse
    Parse one ER7 field of a given data type and print its decoded tree as
    JSON.

normalize
    Parse one ER7 field and print it re-serialized (escapes normalized,
    trailing empty components dropped).

describe
    Print the component schema of a data type as an indented tree.

versions
    List HL7 versions with an available data dictionary.

Exit codes
----------
0  success
1  handled, expected error (HL7FieldToolError, an undecodable field value,
   or KeyboardInterrupt)
2  CLI usage error (argparse, config or argument validation failure)
"""

from __future__ import annotations

import argparse
import base64
import datetime as _dt
import json
import logging
import sys

from decimal import Decimal as _Decimal
from pathlib import Path
from typing import Any, List, Optional

import yaml

from . import __version__
from .api import build_field
from .config import AppConfig, load_config
from .dictionary import available_versions
from .exceptions import HL7FieldToolError, ParseError
from .logging_utils import configure_logging
from .node import FieldNode

# ------------------------------------------------------------------------------
# globals
# ------------------------------------------------------------------------------

LOG = logging.getLogger("hl7_field_tool")

EXIT_OK = 0
EXIT_ERR = 1
EXIT_CLI = 2

# ------------------------------------------------------------------------------
# Parser construction
# ------------------------------------------------------------------------------


def _add_field_options(sub: argparse.ArgumentParser) -> None:
    sub.add_argument("data_type", help='Data type code of the field, e.g. "CX".')
    sub.add_argument(
        "text",
        help='ER7 text of the field. Use "-" to read from stdin.',
    )
    sub.add_argument(
        "--hl7-version",
        default=None,
        help="HL7 version of the data dictionary (defaults to config).",
    )
    sub.add_argument(
        "--tolerant",
        action="store_true",
        help="Keep undecodable components as raw text instead of failing.",
    )
    sub.add_argument(
        "--raw",
        action="store_true",
        help="Do not decode leaf values; keep ER7 text as-is.",
    )


def _build_parser() -> argparse.ArgumentParser:
    """
    Build and return the top-level argparse parser and subcommands.

    Returns
    -------
    argparse.ArgumentParser
        Configured parser with subcommands: parse, normalize, describe,
        versions.
    """
    parser = argparse.ArgumentParser(
        prog="hl7-field",
        description="Decompose, decode and re-encode HL7 v2 fields.",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to YAML config file (overrides defaults).",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase verbosity (-v, -vv).",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"hl7-field-tool (cli) {__version__}",
    )

    sub = parser.add_subparsers(dest="cmd", required=True)

    s1 = sub.add_parser("parse", help="Parse a field and print it as JSON.")
    _add_field_options(s1)
    s1.add_argument(
        "--pretty",
        action="store_true",
        help="Pretty-print JSON output.",
    )

    s2 = sub.add_parser("normalize", help="Parse a field and print it as ER7.")
    _add_field_options(s2)

    s3 = sub.add_parser("describe", help="Print the component schema of a type.")
    s3.add_argument("data_type", help='Data type code, e.g. "XPN".')
    s3.add_argument(
        "--hl7-version",
        default=None,
        help="HL7 version of the data dictionary (defaults to config).",
    )

    sub.add_parser("versions", help="List available dictionary versions.")

    return parser


# ------------------------------------------------------------------------------
# Helpers
# ------------------------------------------------------------------------------


def _read_text_arg(text: str) -> str:
    """
    Return the field text, reading stdin when text is "-".

    A single trailing line ending is stripped from stdin input.

    Raises
    ------
    HL7FieldToolError
        If stdin cannot be read.
    """
    if text != "-":
        return text
    try:
        data = sys.stdin.read()
    except OSError as e:
        raise HL7FieldToolError(f"Failed to read stdin: {e}") from e
    return data.rstrip("\r\n")


def _to_jsonable(obj: Any) -> Any:
    """Normalize decoded field values to JSON-able data."""
    if obj is None or isinstance(obj, (str, int, float, bool)):
        return obj
    if isinstance(obj, (_dt.datetime, _dt.date, _dt.time)):
        return obj.isoformat()
    if isinstance(obj, _Decimal):
        return str(obj)
    if isinstance(obj, (bytes, bytearray)):
        return base64.b64encode(bytes(obj)).decode("ascii")
    if isinstance(obj, dict):
        return {str(k): _to_jsonable(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [_to_jsonable(v) for v in obj]
    return str(obj)


def _build_and_parse(args: argparse.Namespace, cfg: AppConfig) -> FieldNode:
    node = build_field(
        args.data_type,
        args.hl7_version,
        tolerant=True if args.tolerant else None,
        encode_types=False if args.raw else None,
        config=cfg,
    )
    text = _read_text_arg(args.text)
    try:
        node.parse(text)
    except (TypeError, ValueError) as e:
        # A leaf-typed field has no component level to wrap codec errors.
        raise ParseError(e) from e
    for warning in node.warnings:
        LOG.info("Tolerated: %s", warning)
    return node


def _describe_lines(node: FieldNode, indent: int = 0) -> List[str]:
    lines: List[str] = []
    for i, child in enumerate(node, start=1):
        decl = child.declaration
        mean = f" as {decl.dt_mean}" if decl.dt_mean else ""
        pad = "    " * indent
        lines.append(f"{pad}{i:>2} {child.alias} ({decl.dt}{mean}, {decl.opt})")
        lines.extend(_describe_lines(child, indent + 1))
    return lines


# ------------------------------------------------------------------------------
# Command handlers
# ------------------------------------------------------------------------------


def _cmd_parse(args: argparse.Namespace, cfg: AppConfig) -> int:
    """Parse: print the decoded tree as JSON."""
    node = _build_and_parse(args, cfg)
    data = {
        "dataType": node.data_type,
        "version": node.version,
        "value": _to_jsonable(node.as_dict()),
    }
    print(json.dumps(data, indent=2 if args.pretty else None))
    return EXIT_OK


def _cmd_normalize(args: argparse.Namespace, cfg: AppConfig) -> int:
    """Normalize: print the re-serialized ER7 text."""
    node = _build_and_parse(args, cfg)
    print(node.to_er7())
    return EXIT_OK


def _cmd_describe(args: argparse.Namespace, cfg: AppConfig) -> int:
    """Describe: print the declared component tree."""
    node = build_field(args.data_type, args.hl7_version, config=cfg)
    print(f"{node.data_type} (HL7 {node.version})")
    if node.is_leaf:
        print("    primitive")
    for line in _describe_lines(node, indent=1):
        print(line)
    return EXIT_OK


def _cmd_versions(cfg: AppConfig) -> int:
    """Versions: list dictionary versions."""
    print("Available HL7 v2 dictionaries:")
    for version in available_versions(cfg.dictionary_dir):
        print(f"    {version}")
    return EXIT_OK


# ------------------------------------------------------------------------------
# Entrypoint
# ------------------------------------------------------------------------------


def main(argv: Optional[list[str]] = None) -> int:
    """
    CLI entrypoint.

    Parameters
    ----------
    argv : list[str] or None, default None
        Argument list for testing; None uses sys.argv[1:].

    Returns
    -------
    int
        Process exit code (EXIT_OK, EXIT_ERR, or EXIT_CLI).
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(args.verbose)

    try:
        cfg = load_config(args.config)
    except (OSError, TypeError, ValueError, yaml.YAMLError) as e:
        LOG.error("Invalid config %s: %s", args.config, e)
        return EXIT_CLI

    try:
        if args.cmd == "parse":
            return _cmd_parse(args, cfg)
        if args.cmd == "normalize":
            return _cmd_normalize(args, cfg)
        if args.cmd == "describe":
            return _cmd_describe(args, cfg)
        if args.cmd == "versions":
            return _cmd_versions(cfg)
        parser.error("Unknown command")
        return EXIT_CLI

    except ParseError as e:
        LOG.error("Failed to parse %s field: %s", args.data_type, e)
        return EXIT_ERR
    except HL7FieldToolError as e:
        LOG.error("%s", e)
        return EXIT_ERR
    except (TypeError, ValueError) as e:
        LOG.error("Invalid arguments: %s", e)
        return EXIT_CLI
    except KeyboardInterrupt:
        LOG.error("Interrupted")
        return EXIT_ERR


if __name__ == "__main__":
    raise SystemExit(main())
