# src/hl7_field_tool/exceptions.py
"""
Custom exceptions for hl7_field_tool.

All exceptions inherit from HL7FieldToolError so that callers can catch
tool-specific errors without grabbing unrelated built-in exceptions.

Two families matter to callers:

- ParseError: raised while parsing ER7 text into a field tree. Carries the
  underlying cause and the 1-based component position where it was caught.
- ConfigurationError: a broken schema or dictionary. Always fatal, never
  suppressed by tolerant parsing.
"""

from __future__ import annotations

from typing import List, Optional


class HL7FieldToolError(Exception):
    """Base class for all hl7_field_tool exceptions."""

    pass


class ParseError(HL7FieldToolError):
    """
    Raised when a field (or one of its components) cannot be parsed.

    Attributes
    ----------
    cause : BaseException or None
        The original error raised by the codec or a nested component.
    component : int or None
        1-based position of the component at the outermost level that handled
        the error. Every enclosing level overwrites it with its own position.
    path : list of int
        Full position path from the outermost level down to the failing leaf,
        e.g. [4, 2] for the second subcomponent of the fourth component.
    """

    def __init__(
        self, cause: Optional[BaseException] = None, component: Optional[int] = None
    ) -> None:
        super().__init__(str(cause) if cause is not None else "parse error")
        self.cause = cause
        self.component = component
        self.path: List[int] = []

    def __str__(self) -> str:
        msg = str(self.cause) if self.cause is not None else "parse error"
        if self.path:
            where = ".".join(str(p) for p in self.path)
            return f"{msg} (component {self.component}, path {where})"
        if self.component is not None:
            return f"{msg} (component {self.component})"
        return msg


class ConfigurationError(HL7FieldToolError):
    """Raised when the data dictionary or schema is unusable."""

    pass


class DictionaryError(ConfigurationError):
    """Raised when a version dictionary cannot be found, read or validated."""

    pass


class UnknownDataTypeError(ConfigurationError):
    """Raised when a data type code has no entry in the version dictionary."""

    def __init__(self, data_type: str, version: Optional[str] = None) -> None:
        self.data_type = data_type
        self.version = version
        where = f" in version {version}" if version else ""
        super().__init__(f"Unknown HL7 data type ({data_type}){where}")
