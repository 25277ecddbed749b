# src/hl7_field_tool/node.py
"""
Field trees.

A FieldNode is one field, component or subcomponent. The tree for a field is
built eagerly from the data dictionary: a node whose data type declares
components is composite and owns one child per component; any other node is
a leaf and holds a single value.

Depth decides the separator: the field's own level splits on the component
separator ("^"), every level below splits on the subcomponent separator
("&").
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union

from . import codec
from .dictionary import ComponentDeclaration
from .encoding import FIELD_DEPTH, child_depth, separator_for_depth
from .exceptions import ConfigurationError, ParseError
from .schema import SchemaResolver, alias_for

LOG = logging.getLogger(__name__)

# Data type given to components found in ER7 text beyond the declared ones.
EXTENSION_TYPE = "ST"


class FieldNode:
    """
    A node in a field tree.

    Parameters
    ----------
    declaration : ComponentDeclaration
        Schema fragment of this node (data type, description, ...).
    resolver : SchemaResolver
        Resolver for the message version; shared by the whole tree.
    depth : int, default 0
        0 for the field level, 1 below it.
    tolerant : bool, default False
        If True, component parse failures store the raw text instead of
        raising. Suppressed errors are collected in ``warnings``.
    encode_types : bool, default True
        If True, leaf values go through the type codec; otherwise the raw
        ER7 text is stored and emitted verbatim.
    field : Any, optional
        Owning field object, kept as a back-reference only.

    Raises
    ------
    UnknownDataTypeError
        If the declared data type (or any nested one) is not in the dictionary.
    """

    def __init__(
        self,
        declaration: ComponentDeclaration,
        resolver: SchemaResolver,
        depth: int = FIELD_DEPTH,
        *,
        tolerant: bool = False,
        encode_types: bool = True,
        field: Any = None,
        _path: Tuple[int, ...] = (),
        _warnings: Optional[List[ParseError]] = None,
    ) -> None:
        if not isinstance(declaration, ComponentDeclaration):
            raise TypeError(
                "declaration must be ComponentDeclaration, "
                f"got {type(declaration).__name__}"
            )
        if not isinstance(resolver, SchemaResolver):
            raise TypeError(
                f"resolver must be SchemaResolver, got {type(resolver).__name__}"
            )
        self._declaration = declaration
        self._resolver = resolver
        self._depth = depth
        self._tolerant = tolerant
        self._encode_types = encode_types
        self._field = field
        self._path = _path
        self._warnings: List[ParseError] = [] if _warnings is None else _warnings
        self._items: Optional[List[FieldNode]] = None
        self._aliases: Dict[str, int] = {}
        self._value: Any = None

        components = resolver.resolve(declaration.dt)
        if components:
            self._items = []
            for component in components:
                self._define_component(component)

    def _define_component(self, declaration: ComponentDeclaration) -> "FieldNode":
        assert self._items is not None
        index = len(self._items)
        child = FieldNode(
            declaration,
            self._resolver,
            child_depth(self._depth),
            tolerant=self._tolerant,
            encode_types=self._encode_types,
            field=self._field,
            _path=self._path + (index + 1,),
            _warnings=self._warnings,
        )
        self._items.append(child)
        # First declaration wins when two components share a description.
        self._aliases.setdefault(child.alias, index)
        return child

    # --------------------------------------------------------------------------
    # structure
    # --------------------------------------------------------------------------

    def __repr__(self) -> str:
        kind = "leaf" if self.is_leaf else f"{len(self)} components"
        return f"<FieldNode {self.alias or '?'} ({self._declaration.dt}, {kind})>"

    def __len__(self) -> int:
        return len(self._items) if self._items is not None else 0

    def __iter__(self) -> Iterator["FieldNode"]:
        return iter(self._items or ())

    def __getitem__(self, key: Union[int, str]) -> "FieldNode":
        """Return a component by 1-based position or by alias."""
        if isinstance(key, bool) or not isinstance(key, (int, str)):
            raise TypeError(f"key must be int or str, got {type(key).__name__}")
        if self._items is None:
            raise KeyError(f"{self._declaration.dt} has no components")
        if isinstance(key, int):
            if not 1 <= key <= len(self._items):
                raise IndexError(
                    f"component {key} out of range 1..{len(self._items)} "
                    f"for {self._declaration.dt}"
                )
            return self._items[key - 1]
        try:
            return self._items[self._aliases[key]]
        except KeyError:
            raise KeyError(
                f"{self._declaration.dt} has no component named {key!r}"
            ) from None

    @property
    def declaration(self) -> ComponentDeclaration:
        return self._declaration

    @property
    def data_type(self) -> str:
        return self._declaration.dt

    @property
    def alias(self) -> str:
        return alias_for(self._declaration.desc)

    @property
    def depth(self) -> int:
        return self._depth

    @property
    def path(self) -> Tuple[int, ...]:
        """1-based positions from the field down to this node; () for the field."""
        return self._path

    @property
    def field(self) -> Any:
        return self._field

    @property
    def version(self) -> str:
        return self._resolver.version

    @property
    def is_leaf(self) -> bool:
        return self._items is None

    @property
    def components(self) -> Tuple["FieldNode", ...]:
        return tuple(self._items or ())

    @property
    def tolerant(self) -> bool:
        return self._tolerant

    @property
    def encode_types(self) -> bool:
        return self._encode_types

    @property
    def warnings(self) -> List[ParseError]:
        """Errors suppressed by the last tolerant parse of the field."""
        return self._warnings

    # --------------------------------------------------------------------------
    # values
    # --------------------------------------------------------------------------

    @property
    def value(self) -> Any:
        """Leaf value; for a composite, the value of its first component."""
        if self._items is not None:
            return self._items[0].value
        return self._value

    @value.setter
    def value(self, value: Any) -> None:
        if self._items is not None:
            self._items[0].value = value
        else:
            self._value = value

    def set_value(self, value: Any) -> "FieldNode":
        self.value = value
        return self

    def _store_raw(self, text: str) -> None:
        if self._items is not None:
            self._items[0]._store_raw(text)
        else:
            self._value = text

    def _clear(self) -> None:
        if self._items is None:
            self._value = None
            return
        for child in self._items:
            child._clear()

    def as_dict(self) -> Any:
        """
        Return the decoded content as plain Python data.

        Leaves yield their value; composites yield a dict keyed by component
        alias in declaration order.
        """
        if self._items is None:
            return self._value
        return {child.alias: child.as_dict() for child in self._items}

    # --------------------------------------------------------------------------
    # ER7
    # --------------------------------------------------------------------------

    @property
    def er7(self) -> str:
        return self.to_er7()

    @er7.setter
    def er7(self, text: str) -> None:
        self.parse(text)

    def parse(self, text: str) -> None:
        """
        Parse ER7 text into this node and its descendants.

        Components present in the text but not declared are appended as
        free-text components named ``Component<n>``. Components declared but
        missing from the text are cleared.

        Parameters
        ----------
        text : str
            ER7 text of this node (field, component or subcomponent).

        Raises
        ------
        TypeError
            If text is not a string.
        ParseError
            If a component cannot be decoded and the tree is not tolerant.
            ``component`` holds the position at this node's level; ``path``
            holds the full position path down to the failing leaf.
        """
        if not isinstance(text, str):
            raise TypeError(f"text must be str, got {type(text).__name__}")
        if self._path == ():
            # In place: every node of the tree holds this same list.
            self._warnings.clear()

        if self._items is None:
            if self._encode_types:
                self._value = codec.decode(text, self._declaration.semantic_type)
            else:
                self._value = text if text != "" else None
            return

        parts = text.split(separator_for_depth(self._depth))
        for i, part in enumerate(parts):
            if i >= len(self._items):
                LOG.debug(
                    "Extending %s at %s with undeclared component %d",
                    self._declaration.dt,
                    self._path or "field",
                    i + 1,
                )
                self._define_component(
                    ComponentDeclaration(
                        dt=EXTENSION_TYPE, desc=f"Component{i + 1}", opt="O"
                    )
                )
            child = self._items[i]
            try:
                child.parse(part)
            except ConfigurationError:
                raise
            except Exception as e:
                if self._tolerant:
                    child._store_raw(part)
                    self._record_warning(child, e)
                    continue
                err = e if isinstance(e, ParseError) else ParseError(e)
                # Each enclosing level overwrites component with its own position.
                err.component = i + 1
                err.path.insert(0, i + 1)
                if err is e:
                    raise
                raise err from e

        for child in self._items[len(parts):]:
            child._clear()

    def _record_warning(self, child: "FieldNode", error: Exception) -> None:
        warning = ParseError(error, component=child.path[-1])
        warning.path = list(child.path)
        self._warnings.append(warning)
        LOG.warning(
            "Kept raw text for %s component %s: %s",
            self._declaration.dt,
            ".".join(str(p) for p in child.path),
            error,
        )

    def to_er7(self) -> str:
        """
        Serialize this node to ER7 text.

        Trailing empty components are dropped; empty components followed by a
        non-empty one are kept as bare separators. A component with a value
        set counts as non-empty even if it encodes to "".
        """
        if self._items is None:
            if self._value is None or self._value == "":
                return ""
            if self._encode_types:
                return codec.encode(self._value, self._declaration.semantic_type)
            return str(self._value)

        out: List[str] = []
        keep = False
        for child in reversed(self._items):
            text = child.to_er7()
            if keep or text or child.value is not None:
                out.append(text)
                keep = True
        return separator_for_depth(self._depth).join(reversed(out))
