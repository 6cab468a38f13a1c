"""Capability bitsets exposed by the type-graph collaborator.

Bit values follow the TypeScript compiler so serialized graphs produced by a
checker dump can be consumed without translation.
"""

from __future__ import annotations

from enum import IntFlag


class TypeFlags(IntFlag):
    NONE = 0
    Any = 1 << 0
    Unknown = 1 << 1
    String = 1 << 2
    Number = 1 << 3
    Boolean = 1 << 4
    Enum = 1 << 5
    BigInt = 1 << 6
    StringLiteral = 1 << 7
    NumberLiteral = 1 << 8
    BooleanLiteral = 1 << 9
    EnumLiteral = 1 << 10
    BigIntLiteral = 1 << 11
    ESSymbol = 1 << 12
    UniqueESSymbol = 1 << 13
    Void = 1 << 14
    Undefined = 1 << 15
    Null = 1 << 16
    Never = 1 << 17
    TypeParameter = 1 << 18
    Object = 1 << 19
    Union = 1 << 20
    Intersection = 1 << 21


class ObjectFlags(IntFlag):
    NONE = 0
    Class = 1 << 0
    Interface = 1 << 1
    Reference = 1 << 2
    Tuple = 1 << 3
    Anonymous = 1 << 4
    Mapped = 1 << 5


class SymbolFlags(IntFlag):
    NONE = 0
    FunctionScopedVariable = 1 << 0
    BlockScopedVariable = 1 << 1
    Property = 1 << 2
    EnumMember = 1 << 3
    Function = 1 << 4
    Class = 1 << 5
    Interface = 1 << 6
    ConstEnum = 1 << 7
    RegularEnum = 1 << 8
    ValueModule = 1 << 9
    NamespaceModule = 1 << 10
    TypeLiteral = 1 << 11
    ObjectLiteral = 1 << 12
    Method = 1 << 13
    Constructor = 1 << 14
    GetAccessor = 1 << 15
    SetAccessor = 1 << 16
    Signature = 1 << 17
    TypeParameter = 1 << 18
    TypeAlias = 1 << 19
    ExportValue = 1 << 20
    Alias = 1 << 21
    Prototype = 1 << 22
    ExportStar = 1 << 23
    Optional = 1 << 24
    Transient = 1 << 25


def parse_flags(flag_type: type[IntFlag], value: int | str | list[str] | None) -> IntFlag:
    """Coerce an int, a ``"A|B"`` string or a list of names into ``flag_type``."""
    if value is None:
        return flag_type(0)
    if isinstance(value, int):
        return flag_type(value)
    names = value.split("|") if isinstance(value, str) else list(value)
    result = flag_type(0)
    for raw in names:
        name = raw.strip()
        if not name:
            continue
        try:
            result |= flag_type[name]
        except KeyError as exc:
            msg = f"Unknown {flag_type.__name__} member '{name}'"
            raise ValueError(msg) from exc
    return result


def flag_names(value: IntFlag) -> list[str]:
    """Return member names set in ``value`` in declaration order."""
    return [
        member.name
        for member in type(value)
        if member.value and member.name and (value & member) == member
    ]
