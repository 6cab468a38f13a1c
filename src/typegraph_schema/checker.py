"""Capability interface consumed from the type-checking collaborator.

The engine never parses source text. Anything able to answer the queries on
``TypeChecker`` (a live compiler bridge, a serialized graph dump) can feed it.
"""

from __future__ import annotations

from collections.abc import Hashable, Sequence
from dataclasses import dataclass, field
from typing import Any, Literal, Protocol

from .flags import ObjectFlags, SymbolFlags, TypeFlags

DeclarationKind = Literal["interface", "type_alias", "enum", "class", "function", "variable", "module"]

TRANSPILABLE_KINDS: frozenset[str] = frozenset({"interface", "type_alias", "enum", "class"})


@dataclass(frozen=True)
class PseudoBigInt:
    """Big-integer literal kept as sign + digits so no precision is implied."""

    negative: bool
    base10_value: str

    def __str__(self) -> str:
        return f"{'-' if self.negative else ''}{self.base10_value}n"


@dataclass(frozen=True)
class SymbolInfo:
    name: str
    flags: SymbolFlags = SymbolFlags.NONE


@dataclass(frozen=True)
class MemberInfo:
    """A property-like member of an object type."""

    name: str
    type: Any
    flags: SymbolFlags = SymbolFlags.Property
    modifiers: frozenset[str] = field(default_factory=frozenset)
    # Return type for get-accessors; ``type`` holds the setter/property view.
    accessor_type: Any = None


@dataclass(frozen=True)
class DeclarationInfo:
    name: str
    kind: str
    type: Any


class TypeChecker(Protocol):
    """Read-only queries over an immutable type graph.

    Nodes are opaque handles; only the checker interprets them.
    """

    def flags_of(self, node: Any) -> TypeFlags: ...

    def object_flags_of(self, node: Any) -> ObjectFlags: ...

    def symbol_of(self, node: Any) -> SymbolInfo | None: ...

    def identity_of(self, node: Any) -> Hashable: ...

    def constituents(self, node: Any) -> Sequence[Any]: ...

    def type_arguments(self, node: Any) -> Sequence[Any]: ...

    def target_object_flags(self, node: Any) -> ObjectFlags: ...

    def members(self, node: Any) -> Sequence[MemberInfo]: ...

    def string_index_type(self, node: Any) -> Any | None: ...

    def literal_value(self, node: Any) -> str | int | float | PseudoBigInt | None: ...

    def intrinsic_name(self, node: Any) -> str | None: ...

    def type_to_string(self, node: Any) -> str: ...

    def declarations(self) -> Sequence[DeclarationInfo]: ...


def is_transpilable(declaration: DeclarationInfo) -> bool:
    """True for declarations describing a data structure (interface, alias, enum, class)."""
    return declaration.kind in TRANSPILABLE_KINDS
