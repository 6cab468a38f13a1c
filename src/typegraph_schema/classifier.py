"""Type classification predicates.

Every predicate looks at a node's own flags, object flags and symbol only;
none of them walks into constituents, so they compose freely. ``classify``
folds them into a single ``TypeKind`` tag.
"""

from __future__ import annotations

import operator
from collections.abc import Sequence
from enum import Enum
from functools import reduce
from typing import Any

from .checker import MemberInfo, TypeChecker
from .errors import ClassificationError
from .flags import ObjectFlags, SymbolFlags, TypeFlags

ARRAY_SYMBOL_NAMES = frozenset({"Array", "ReadonlyArray"})

# Order matters: the first flag present names the primitive.
PRIMITIVE_FLAGS: tuple[tuple[TypeFlags, str], ...] = (
    (TypeFlags.Any, "any"),
    (TypeFlags.String, "string"),
    (TypeFlags.Number, "number"),
    (TypeFlags.BigInt, "bigint"),
    (TypeFlags.Boolean, "boolean"),
    (TypeFlags.Void, "void"),
    (TypeFlags.Undefined, "undefined"),
    (TypeFlags.Null, "null"),
    (TypeFlags.Never, "never"),
)

_PRIMITIVE_MASK = reduce(operator.or_, (flag for flag, _ in PRIMITIVE_FLAGS))

_LITERAL_MASK = TypeFlags.StringLiteral | TypeFlags.NumberLiteral | TypeFlags.BooleanLiteral


class TypeKind(str, Enum):
    """Closed set of shape variants a type node can resolve to."""

    ENUM = "enum"
    LITERAL = "literal"
    BIGINT_LITERAL = "bigint_literal"
    PRIMITIVE = "primitive"
    GENERIC = "generic"
    UNION = "union"
    INTERSECTION = "intersection"
    ARRAY = "array"
    TUPLE = "tuple"
    FUNCTION = "function"
    DATE = "date"
    INDEXABLE = "indexable"
    OBJECT = "object"


def is_literal(checker: TypeChecker, node: Any) -> bool:
    """A literal type, e.g. ``10`` in ``type Foo = { bar: 10 }``."""
    return bool(checker.flags_of(node) & _LITERAL_MASK)


def is_bigint_literal(checker: TypeChecker, node: Any) -> bool:
    return bool(checker.flags_of(node) & TypeFlags.BigIntLiteral)


def is_primitive(checker: TypeChecker, node: Any) -> bool:
    """One of the base type constructs: ``string``, ``number``, ``never`` ..."""
    return bool(checker.flags_of(node) & _PRIMITIVE_MASK)


def primitive_name(checker: TypeChecker, node: Any) -> str:
    flags = checker.flags_of(node)
    for flag, name in PRIMITIVE_FLAGS:
        if flags & flag:
            return name
    raise ClassificationError(f"'{checker.type_to_string(node)}' is not a primitive")


def is_undefined(checker: TypeChecker, node: Any) -> bool:
    return bool(checker.flags_of(node) & TypeFlags.Undefined)


def is_defined(checker: TypeChecker, node: Any) -> bool:
    return not is_undefined(checker, node)


def is_literal_true(checker: TypeChecker, node: Any) -> bool:
    # Boolean literals carry no value, only the checker's intrinsic name.
    return checker.literal_value(node) is None and checker.intrinsic_name(node) == "true"


def is_literal_false(checker: TypeChecker, node: Any) -> bool:
    return checker.literal_value(node) is None and checker.intrinsic_name(node) == "false"


def is_union_boolean(checker: TypeChecker, types: Sequence[Any]) -> bool:
    """True when ``types`` is exactly ``true | false`` in either order.

    Undefined constituents must already have been filtered out.
    """
    if len(types) != 2:
        return False
    first, second = types
    if not is_literal(checker, first) or not is_literal(checker, second):
        return False
    return (is_literal_true(checker, first) and is_literal_false(checker, second)) or (
        is_literal_true(checker, second) and is_literal_false(checker, first)
    )


def is_object(checker: TypeChecker, node: Any) -> bool:
    return bool(checker.flags_of(node) & TypeFlags.Object)


def is_reference(checker: TypeChecker, node: Any) -> bool:
    """A generic instantiation such as ``Foo<T>``."""
    return is_object(checker, node) and bool(checker.object_flags_of(node) & ObjectFlags.Reference)


def is_array(checker: TypeChecker, node: Any) -> bool:
    """A reference to the global ``Array`` generic.

    Arrays have no dedicated flag, so this relies on the symbol name.
    """
    if not is_reference(checker, node):
        return False
    symbol = checker.symbol_of(node)
    return symbol is not None and symbol.name in ARRAY_SYMBOL_NAMES


def is_tuple(checker: TypeChecker, node: Any) -> bool:
    if not is_reference(checker, node) or is_array(checker, node):
        return False
    return bool(checker.target_object_flags(node) & ObjectFlags.Tuple)


def is_enum(checker: TypeChecker, node: Any) -> bool:
    flags = checker.flags_of(node)
    return bool(flags & TypeFlags.EnumLiteral and flags & TypeFlags.Union)


def is_union(checker: TypeChecker, node: Any) -> bool:
    return bool(checker.flags_of(node) & TypeFlags.Union)


def is_intersection(checker: TypeChecker, node: Any) -> bool:
    return bool(checker.flags_of(node) & TypeFlags.Intersection)


def is_generic_type(checker: TypeChecker, node: Any) -> bool:
    """Best-effort: TypeParameter approximates an unresolved ``T``."""
    return bool(checker.flags_of(node) & TypeFlags.TypeParameter)


def is_function_like(checker: TypeChecker, node: Any) -> bool:
    """Best-effort: an object whose symbol is a function or a method."""
    if not is_object(checker, node):
        return False
    symbol = checker.symbol_of(node)
    return symbol is not None and bool(symbol.flags & (SymbolFlags.Function | SymbolFlags.Method))


def is_date(type_name: str) -> bool:
    """Nominal check; a user type named ``Date`` is a false positive."""
    return type_name == "Date"


def is_indexable(checker: TypeChecker, node: Any) -> bool:
    """An object made only of a string index signature, e.g. ``{ [key: string]: T }``."""
    if not is_object(checker, node):
        return False
    return checker.string_index_type(node) is not None and not checker.members(node)


def is_optional(member: MemberInfo) -> bool:
    return bool(member.flags & SymbolFlags.Optional)


def is_prototype(member: MemberInfo) -> bool:
    return bool(member.flags & SymbolFlags.Prototype)


def is_get_accessor(member: MemberInfo) -> bool:
    return bool(member.flags & SymbolFlags.GetAccessor)


def is_method(member: MemberInfo) -> bool:
    return bool(member.flags & (SymbolFlags.Method | SymbolFlags.Function))


def has_modifier(member: MemberInfo, modifier: str) -> bool:
    """True when the member was declared with ``modifier`` (``private``, ``readonly`` ...)."""
    return modifier in member.modifiers


def classify(checker: TypeChecker, node: Any) -> TypeKind:
    """Return the single shape variant of ``node``.

    Raises ``ClassificationError`` when nothing matches; there is no default.
    """
    if is_enum(checker, node):
        return TypeKind.ENUM
    if is_literal(checker, node):
        return TypeKind.LITERAL
    if is_bigint_literal(checker, node):
        return TypeKind.BIGINT_LITERAL
    # ``boolean`` is itself a union of true | false, so primitives go first.
    if is_primitive(checker, node):
        return TypeKind.PRIMITIVE
    if is_generic_type(checker, node):
        return TypeKind.GENERIC
    if is_union(checker, node):
        return TypeKind.UNION
    if is_intersection(checker, node):
        return TypeKind.INTERSECTION
    if is_object(checker, node):
        if is_array(checker, node):
            return TypeKind.ARRAY
        if is_tuple(checker, node):
            return TypeKind.TUPLE
        if is_function_like(checker, node):
            return TypeKind.FUNCTION
        if is_date(checker.type_to_string(node)):
            return TypeKind.DATE
        if is_indexable(checker, node):
            return TypeKind.INDEXABLE
        return TypeKind.OBJECT
    raise ClassificationError(f"unhandled type '{checker.type_to_string(node)}'")
