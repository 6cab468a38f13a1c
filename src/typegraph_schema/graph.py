"""Serialized type-graph documents and a checker backed by them."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Any

import ujson as json
import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from .checker import DeclarationInfo, DeclarationKind, MemberInfo, PseudoBigInt, SymbolInfo
from .errors import TypeGraphError
from .flags import ObjectFlags, SymbolFlags, TypeFlags, flag_names, parse_flags


class SymbolSpec(BaseModel):
    """Name binding attached to a type node."""

    name: str
    flags: int = 0

    @field_validator("flags", mode="before")
    @classmethod
    def parse_symbol_flags(cls, value: Any) -> int:
        return int(parse_flags(SymbolFlags, value))


class BigIntValue(BaseModel):
    negative: bool = False
    base10_value: str = Field(pattern=r"^\d+$")


class MemberSpec(BaseModel):
    """Property-like member of an object node."""

    name: str
    type: int
    optional: bool = False
    flags: int = int(SymbolFlags.Property)
    modifiers: list[str] = Field(default_factory=list)
    accessor_type: int | None = None

    @field_validator("flags", mode="before")
    @classmethod
    def parse_member_flags(cls, value: Any) -> int:
        return int(parse_flags(SymbolFlags, value))


class TypeNodeSpec(BaseModel):
    """One node of the type graph, as dumped by a type checker."""

    id: int
    flags: int
    object_flags: int = 0
    symbol: SymbolSpec | None = None
    value: BigIntValue | int | float | str | None = None
    intrinsic_name: str | None = None
    # Union/intersection constituents
    types: list[int] = Field(default_factory=list)
    # Generic arguments of a reference; element types of a tuple
    type_arguments: list[int] = Field(default_factory=list)
    target: int | None = None
    members: list[MemberSpec] = Field(default_factory=list)
    string_index: int | None = None
    display: str | None = None

    @field_validator("flags", mode="before")
    @classmethod
    def parse_type_flags(cls, value: Any) -> int:
        return int(parse_flags(TypeFlags, value))

    @field_validator("object_flags", mode="before")
    @classmethod
    def parse_object_flags(cls, value: Any) -> int:
        return int(parse_flags(ObjectFlags, value))

    def references(self) -> list[int]:
        refs = [*self.types, *self.type_arguments]
        refs.extend(member.type for member in self.members)
        refs.extend(m.accessor_type for m in self.members if m.accessor_type is not None)
        if self.target is not None:
            refs.append(self.target)
        if self.string_index is not None:
            refs.append(self.string_index)
        return refs


class DeclarationSpec(BaseModel):
    name: str
    kind: DeclarationKind
    type: int


class TypeGraphDocument(BaseModel):
    """Top-level serialized graph: nodes plus the file's declarations."""

    nodes: list[TypeNodeSpec]
    declarations: list[DeclarationSpec] = Field(default_factory=list)

    @model_validator(mode="after")
    def validate_references(self) -> TypeGraphDocument:
        seen: set[int] = set()
        for node in self.nodes:
            if node.id in seen:
                raise ValueError(f"duplicate node id {node.id}")
            seen.add(node.id)
        for node in self.nodes:
            missing = [ref for ref in node.references() if ref not in seen]
            if missing:
                raise ValueError(f"node {node.id} references unknown nodes {missing}")
        for decl in self.declarations:
            if decl.type not in seen:
                raise ValueError(f"declaration {decl.name} references unknown node {decl.type}")
        return self

    def summary(self) -> dict[str, Any]:
        """Return a JSON-friendly summary for logging."""
        kinds: dict[str, int] = {}
        for decl in self.declarations:
            kinds[decl.kind] = kinds.get(decl.kind, 0) + 1
        return {"nodes": len(self.nodes), "declarations": kinds}


class DocumentChecker:
    """``TypeChecker`` over an in-memory ``TypeGraphDocument``.

    Node handles are the ``TypeNodeSpec`` objects themselves; identity is the
    node id, which is only meaningful inside one document.
    """

    def __init__(self, document: TypeGraphDocument) -> None:
        self.document = document
        self._nodes = {node.id: node for node in document.nodes}

    def node(self, ident: int) -> TypeNodeSpec:
        return self._nodes[ident]

    def flags_of(self, node: TypeNodeSpec) -> TypeFlags:
        return TypeFlags(node.flags)

    def object_flags_of(self, node: TypeNodeSpec) -> ObjectFlags:
        return ObjectFlags(node.object_flags)

    def symbol_of(self, node: TypeNodeSpec) -> SymbolInfo | None:
        if node.symbol is None:
            return None
        return SymbolInfo(name=node.symbol.name, flags=SymbolFlags(node.symbol.flags))

    def identity_of(self, node: TypeNodeSpec) -> int:
        return node.id

    def constituents(self, node: TypeNodeSpec) -> list[TypeNodeSpec]:
        return [self._nodes[ident] for ident in node.types]

    def type_arguments(self, node: TypeNodeSpec) -> list[TypeNodeSpec]:
        return [self._nodes[ident] for ident in node.type_arguments]

    def target_object_flags(self, node: TypeNodeSpec) -> ObjectFlags:
        target = self._nodes[node.target] if node.target is not None else node
        return ObjectFlags(target.object_flags)

    def members(self, node: TypeNodeSpec) -> list[MemberInfo]:
        out = []
        for member in node.members:
            flags = SymbolFlags(member.flags)
            if member.optional:
                flags |= SymbolFlags.Optional
            accessor = self._nodes[member.accessor_type] if member.accessor_type is not None else None
            out.append(
                MemberInfo(
                    name=member.name,
                    type=self._nodes[member.type],
                    flags=flags,
                    modifiers=frozenset(member.modifiers),
                    accessor_type=accessor,
                )
            )
        return out

    def string_index_type(self, node: TypeNodeSpec) -> TypeNodeSpec | None:
        if node.string_index is None:
            return None
        return self._nodes[node.string_index]

    def literal_value(self, node: TypeNodeSpec) -> str | int | float | PseudoBigInt | None:
        if isinstance(node.value, BigIntValue):
            return PseudoBigInt(negative=node.value.negative, base10_value=node.value.base10_value)
        return node.value

    def intrinsic_name(self, node: TypeNodeSpec) -> str | None:
        return node.intrinsic_name

    def type_to_string(self, node: TypeNodeSpec) -> str:
        if node.display:
            return node.display
        if node.intrinsic_name:
            return node.intrinsic_name
        if node.symbol is not None:
            return node.symbol.name
        return "|".join(flag_names(TypeFlags(node.flags))) or f"#{node.id}"

    def declarations(self) -> Sequence[DeclarationInfo]:
        return [
            DeclarationInfo(name=decl.name, kind=decl.kind, type=self._nodes[decl.type])
            for decl in self.document.declarations
        ]


def load_type_graph(path: str | Path) -> TypeGraphDocument:
    """Load a type graph from YAML or JSON."""
    path = Path(path)
    data: Any
    text = path.read_text()
    if path.suffix in {".yaml", ".yml"}:
        data = yaml.safe_load(text)
    else:
        data = json.loads(text)
    if not isinstance(data, dict):
        raise TypeGraphError(f"Invalid type graph {path}: expected a mapping")
    try:
        return TypeGraphDocument(**data)
    except ValidationError as exc:
        raise TypeGraphError(f"Invalid type graph {path}") from exc


def save_type_graph(document: TypeGraphDocument, path: str | Path) -> None:
    """Persist a type graph as YAML or JSON based on file suffix."""
    path = Path(path)
    payload = document.model_dump(mode="python", exclude_defaults=True)
    if path.suffix in {".yaml", ".yml"}:
        path.write_text(yaml.safe_dump(payload, sort_keys=False))
    else:
        path.write_text(json.dumps(payload, indent=2))
