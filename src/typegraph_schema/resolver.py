"""Type graph resolution: classify, resolve children, build.

A ``TypeResolver`` is one pass. It memoizes every node it finishes by
identity and detects cycles through nodes that are still being resolved.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Hashable, Iterable, Iterator, Sequence
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from typing import Any

from .checker import DeclarationInfo, MemberInfo, TypeChecker, is_transpilable
from .classifier import (
    TypeKind,
    classify,
    has_modifier,
    is_defined,
    is_function_like,
    is_get_accessor,
    is_literal,
    is_literal_false,
    is_literal_true,
    is_method,
    is_optional,
    is_prototype,
    is_union,
    is_union_boolean,
    primitive_name,
)
from .config import ResolverConfig
from .errors import (
    ClassificationError,
    DepthExceededError,
    ResolutionError,
    TypeGraphSchemaError,
    UnsupportedPrimitiveError,
    format_path,
)
from .schema import (
    JsonSchema,
    JsonSchemaLiteral,
    ResolvedProperty,
    build_all_of,
    build_any,
    build_any_of,
    build_array,
    build_cycle_placeholder,
    build_date,
    build_enum,
    build_generic,
    build_indexable_object,
    build_literal,
    build_object,
    build_primitive,
    build_reference,
    build_tuple,
)

logger = logging.getLogger(__name__)

HIDDEN_MODIFIERS = ("private", "protected")

# Intersections of these kinds merge into one closed object.
_MERGEABLE_KINDS = frozenset({TypeKind.OBJECT, TypeKind.INDEXABLE})


class _State(Enum):
    RESOLVING = "resolving"
    RESOLVED = "resolved"


@dataclass
class DeclarationResult:
    """Outcome for one top-level declaration: a schema or an error, never both."""

    name: str
    kind: str
    schema: JsonSchema | None = None
    error: TypeGraphSchemaError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class TypeResolver:
    """Resolve type nodes into JSON Schema fragments within one pass."""

    def __init__(self, checker: TypeChecker, config: ResolverConfig | None = None) -> None:
        self.checker = checker
        self.config = config or ResolverConfig()
        self._states: dict[Hashable, _State] = {}
        self._cache: dict[Hashable, JsonSchema] = {}
        self._declared_names: dict[Hashable, str] = {}
        self._declaration: str | None = None
        self._path: list[str] = []
        self._depth = 0
        self._handlers: dict[TypeKind, Callable[[Any], JsonSchema]] = {
            TypeKind.ENUM: self._resolve_enum,
            TypeKind.LITERAL: self._resolve_literal,
            TypeKind.BIGINT_LITERAL: self._resolve_bigint_literal,
            TypeKind.PRIMITIVE: self._resolve_primitive,
            TypeKind.GENERIC: self._resolve_generic,
            TypeKind.UNION: self._resolve_union,
            TypeKind.INTERSECTION: self._resolve_intersection,
            TypeKind.ARRAY: self._resolve_array,
            TypeKind.TUPLE: self._resolve_tuple,
            TypeKind.FUNCTION: self._resolve_function,
            TypeKind.DATE: self._resolve_date,
            TypeKind.INDEXABLE: self._resolve_indexable,
            TypeKind.OBJECT: self._resolve_object,
        }

    @property
    def handled_kinds(self) -> frozenset[TypeKind]:
        return frozenset(self._handlers)

    def declare(self, declarations: Iterable[DeclarationInfo]) -> None:
        """Name the nodes owned by ``declarations`` before any of them resolves.

        Cycle breaks reached from an earlier declaration then still point at
        the later declaration that owns the node.
        """
        for declaration in declarations:
            key = self.checker.identity_of(declaration.type)
            self._declared_names.setdefault(key, declaration.name)

    def resolve_declaration(self, declaration: DeclarationInfo) -> JsonSchema:
        """Resolve the type behind a top-level declaration."""
        self.declare([declaration])
        self._declaration = declaration.name
        self._path = []
        self._depth = 0
        try:
            return self.resolve(declaration.type)
        finally:
            self._declaration = None

    def resolve(self, node: Any) -> JsonSchema:
        key = self.checker.identity_of(node)
        state = self._states.get(key)
        if state is _State.RESOLVED:
            return self._cache[key]
        if state is _State.RESOLVING:
            return self._break_cycle(key, node)
        if self._depth >= self.config.max_depth:
            raise DepthExceededError(self.config.max_depth, self._declaration, self._path)

        self._states[key] = _State.RESOLVING
        self._depth += 1
        try:
            schema = self._dispatch(node)
        except RecursionError as exc:
            # The interpreter's stack ran out before max_depth did.
            del self._states[key]
            raise DepthExceededError(self._depth, self._declaration, self._path) from exc
        except Exception:
            # Leave no half-resolved node behind for sibling declarations.
            del self._states[key]
            raise
        finally:
            self._depth -= 1
        self._cache[key] = schema
        self._states[key] = _State.RESOLVED
        return schema

    def classify(self, node: Any) -> TypeKind:
        try:
            return classify(self.checker, node)
        except ClassificationError as exc:
            raise ClassificationError(exc.detail, self._declaration, self._path) from exc

    def _fail(self, detail: str) -> ClassificationError:
        return ClassificationError(detail, self._declaration, self._path)

    @contextmanager
    def _at(self, segment: str) -> Iterator[None]:
        self._path.append(segment)
        try:
            yield
        finally:
            self._path.pop()

    def _dispatch(self, node: Any) -> JsonSchema:
        kind = self.classify(node)
        handler = self._handlers.get(kind)
        if handler is None:
            raise self._fail(f"no resolution rule for {kind.value} type")
        return handler(node)

    def _break_cycle(self, key: Hashable, node: Any) -> JsonSchema:
        name = self._declared_names.get(key)
        logger.info(
            "Breaking cycle at %s through %s",
            format_path(self._declaration, self._path),
            name or self.checker.type_to_string(node),
        )
        if self.config.cycle_policy == "ref" and name is not None:
            return build_reference(name)
        return build_cycle_placeholder(name or self.checker.type_to_string(node))

    def _literal(self, node: Any) -> JsonSchemaLiteral:
        value = self.checker.literal_value(node)
        if value is None:
            if is_literal_true(self.checker, node):
                return build_literal(True)
            if is_literal_false(self.checker, node):
                return build_literal(False)
            raise self._fail(f"literal '{self.checker.type_to_string(node)}' has no value")
        if not isinstance(value, (str, int, float)):
            raise self._fail(f"literal '{self.checker.type_to_string(node)}' is not a scalar")
        return build_literal(value)

    def _literal_pairs(self, nodes: Iterable[Any]) -> list[tuple[str, JsonSchema]]:
        pairs = []
        for node in nodes:
            symbol = self.checker.symbol_of(node)
            name = symbol.name if symbol else self.checker.type_to_string(node)
            pairs.append((name, self._literal(node)))
        return pairs

    def _resolve_literal(self, node: Any) -> JsonSchema:
        # A standalone literal becomes a one-member enum so it stays a valid schema.
        return build_enum(self._literal_pairs([node]))

    def _resolve_bigint_literal(self, node: Any) -> JsonSchema:
        value = self.checker.literal_value(node)
        raise UnsupportedPrimitiveError(f"bigint literal {value}", self._declaration, self._path)

    def _resolve_primitive(self, node: Any) -> JsonSchema:
        kind = primitive_name(self.checker, node)
        try:
            return build_primitive(kind)
        except UnsupportedPrimitiveError as exc:
            raise UnsupportedPrimitiveError(exc.kind, self._declaration, self._path) from exc

    def _resolve_generic(self, node: Any) -> JsonSchema:
        return build_generic(self.checker.type_to_string(node))

    def _resolve_enum(self, node: Any) -> JsonSchema:
        members = self.checker.constituents(node)
        for member in members:
            if not is_literal(self.checker, member):
                raise self._fail(f"enum member '{self.checker.type_to_string(member)}' is not a literal")
        return build_enum(self._literal_pairs(members))

    def _resolve_union(self, node: Any) -> JsonSchema:
        # Optionality lives on the member descriptor, not in the schema.
        types = [t for t in self.checker.constituents(node) if is_defined(self.checker, t)]
        if not types:
            return build_primitive("undefined")
        if len(types) == 1:
            return self.resolve(types[0])
        if is_union_boolean(self.checker, types):
            return build_primitive("boolean")

        literals = [t for t in types if is_literal(self.checker, t)]
        others = [t for t in types if not is_literal(self.checker, t)]
        has_true = any(is_literal_true(self.checker, t) for t in literals)
        has_false = any(is_literal_false(self.checker, t) for t in literals)
        has_boolean = has_true and has_false
        if has_boolean:
            literals = [
                t
                for t in literals
                if not is_literal_true(self.checker, t) and not is_literal_false(self.checker, t)
            ]
        if not others and not has_boolean:
            return build_enum(self._literal_pairs(literals))

        options: list[JsonSchema] = []
        if has_boolean:
            options.append(build_primitive("boolean"))
        if literals:
            options.append(build_enum(self._literal_pairs(literals)))
        options.extend(self.resolve(t) for t in others)
        return build_any_of(options)

    def _resolve_intersection(self, node: Any) -> JsonSchema:
        parts = self.checker.constituents(node)
        if parts and all(self.classify(part) in _MERGEABLE_KINDS for part in parts):
            return self._merge_objects(parts)
        return build_all_of(self.resolve(part) for part in parts)

    def _merge_objects(self, parts: Sequence[Any]) -> JsonSchema:
        schemas: dict[str, list[JsonSchema]] = {}
        optional: dict[str, bool] = {}
        for part in parts:
            for prop in self._resolve_members(part):
                schemas.setdefault(prop.name, []).append(prop.schema)
                optional[prop.name] = optional.get(prop.name, True) and prop.is_optional
        properties = [
            ResolvedProperty(
                name,
                optional[name],
                found[0] if len(found) == 1 else build_all_of(found),
            )
            for name, found in schemas.items()
        ]
        indexes = [self._resolve_index(part) for part in parts]
        indexes = [index for index in indexes if index is not None]
        index: JsonSchema | None = None
        if len(indexes) == 1:
            index = indexes[0]
        elif indexes:
            index = build_all_of(indexes)
        return build_object(properties, index)

    def _resolve_array(self, node: Any) -> JsonSchema:
        args = self.checker.type_arguments(node)
        with self._at("[]"):
            item = self.resolve(args[0]) if args else build_any()
        return build_array(item)

    def _resolve_tuple(self, node: Any) -> JsonSchema:
        items = []
        for position, element in enumerate(self.checker.type_arguments(node)):
            with self._at(f"[{position}]"):
                items.append(self.resolve(element))
        return build_tuple(items)

    def _resolve_function(self, node: Any) -> JsonSchema:
        raise self._fail(
            f"function type '{self.checker.type_to_string(node)}' has no JSON Schema representation"
        )

    def _resolve_date(self, node: Any) -> JsonSchema:
        if self.config.dates_as_strings:
            return build_date()
        return self._resolve_object(node)

    def _resolve_indexable(self, node: Any) -> JsonSchema:
        index = self._resolve_index(node)
        if index is None:
            raise self._fail("indexable type without an index signature")
        return build_indexable_object(index)

    def _resolve_index(self, node: Any) -> JsonSchema | None:
        index_type = self.checker.string_index_type(node)
        if index_type is None:
            return None
        with self._at("[string]"):
            return self.resolve(index_type)

    def _resolve_object(self, node: Any) -> JsonSchema:
        return build_object(self._resolve_members(node), self._resolve_index(node))

    def _resolve_members(self, node: Any) -> list[ResolvedProperty]:
        properties = []
        for member in self.checker.members(node):
            if self._skip_member(member):
                continue
            member_type = member.type
            if is_get_accessor(member) and member.accessor_type is not None:
                member_type = member.accessor_type
            if self._is_callable(member_type):
                continue
            with self._at(member.name):
                schema = self.resolve(member_type)
            properties.append(ResolvedProperty(member.name, is_optional(member), schema))
        return properties

    def _skip_member(self, member: MemberInfo) -> bool:
        if is_prototype(member) or is_method(member):
            return True
        if self.config.skip_private:
            return any(has_modifier(member, modifier) for modifier in HIDDEN_MODIFIERS)
        return False

    def _is_callable(self, node: Any) -> bool:
        """Function-like, or an optional function (``fn?: () => void``)."""
        if is_function_like(self.checker, node):
            return True
        if not is_union(self.checker, node):
            return False
        defined = [t for t in self.checker.constituents(node) if is_defined(self.checker, t)]
        return bool(defined) and all(is_function_like(self.checker, t) for t in defined)


def resolve_declarations(
    checker: TypeChecker,
    declarations: Iterable[DeclarationInfo] | None = None,
    config: ResolverConfig | None = None,
) -> list[DeclarationResult]:
    """Resolve every transpilable declaration in one pass.

    A failing declaration is reported in its result and does not stop the
    others.
    """
    resolver = TypeResolver(checker, config)
    if declarations is None:
        declarations = checker.declarations()
    declarations = list(declarations)
    resolver.declare(decl for decl in declarations if is_transpilable(decl))
    results: list[DeclarationResult] = []
    for declaration in declarations:
        if not is_transpilable(declaration):
            logger.debug("Skipping %s declaration %s", declaration.kind, declaration.name)
            continue
        try:
            schema = resolver.resolve_declaration(declaration)
        except ResolutionError as exc:
            logger.warning("Could not resolve %s: %s", declaration.name, exc)
            results.append(DeclarationResult(declaration.name, declaration.kind, error=exc))
            continue
        results.append(DeclarationResult(declaration.name, declaration.kind, schema=schema))
    return results
