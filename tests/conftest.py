import pytest

from typegraph_schema.graph import DocumentChecker, TypeGraphDocument

SHAPES_GRAPH = {
    "nodes": [
        {"id": 1, "flags": "String", "intrinsic_name": "string"},
        {"id": 2, "flags": "Number", "intrinsic_name": "number"},
        {"id": 3, "flags": ["Boolean", "Union"], "intrinsic_name": "boolean", "types": [4, 5]},
        {"id": 4, "flags": "BooleanLiteral", "intrinsic_name": "true"},
        {"id": 5, "flags": "BooleanLiteral", "intrinsic_name": "false"},
        {"id": 6, "flags": "Undefined", "intrinsic_name": "undefined"},
        {"id": 7, "flags": "Null", "intrinsic_name": "null"},
        {"id": 8, "flags": "Never", "intrinsic_name": "never"},
        {"id": 9, "flags": "Any", "intrinsic_name": "any"},
        {"id": 10, "flags": "BigInt", "intrinsic_name": "bigint"},
        {
            "id": 11,
            "flags": "Object",
            "object_flags": "Reference",
            "symbol": {"name": "Array", "flags": "Interface"},
            "type_arguments": [1],
            "display": "string[]",
        },
        {
            "id": 12,
            "flags": "Object",
            "object_flags": "Reference",
            "target": 13,
            "type_arguments": [1, 2, 3],
            "display": "[string, number, boolean]",
        },
        {"id": 13, "flags": "Object", "object_flags": "Tuple|Reference", "display": "tuple"},
        {"id": 14, "flags": "Union", "types": [6, 2]},
        {"id": 15, "flags": "Union", "types": [5, 4]},
        {
            "id": 16,
            "flags": "Object",
            "object_flags": "Anonymous",
            "symbol": {"name": "__function", "flags": "Function"},
            "display": "() => string",
        },
        {"id": 17, "flags": "Union", "types": [6, 16]},
        # interface Person
        {
            "id": 20,
            "flags": "Object",
            "object_flags": "Interface",
            "symbol": {"name": "Person", "flags": "Interface"},
            "members": [
                {"name": "name", "type": 1},
                {"name": "age", "type": 14, "optional": True},
                {"name": "tags", "type": 11},
                {"name": "position", "type": 12},
                {"name": "verified", "type": 15},
                {"name": "greet", "type": 16, "flags": "Method"},
                {"name": "callback", "type": 17, "optional": True},
            ],
        },
        # enum Color { Red = 1, Green, Blue }
        {
            "id": 30,
            "flags": ["EnumLiteral", "Union"],
            "symbol": {"name": "Color", "flags": "RegularEnum"},
            "types": [31, 32, 33],
        },
        {
            "id": 31,
            "flags": ["NumberLiteral", "EnumLiteral"],
            "value": 1,
            "symbol": {"name": "Red", "flags": "EnumMember"},
        },
        {
            "id": 32,
            "flags": ["NumberLiteral", "EnumLiteral"],
            "value": 2,
            "symbol": {"name": "Green", "flags": "EnumMember"},
        },
        {
            "id": 33,
            "flags": ["NumberLiteral", "EnumLiteral"],
            "value": 3,
            "symbol": {"name": "Blue", "flags": "EnumMember"},
        },
        # type Node = { next?: Node; value: number }
        {
            "id": 40,
            "flags": "Object",
            "object_flags": "Anonymous",
            "symbol": {"name": "__type", "flags": "TypeLiteral"},
            "display": "Node",
            "members": [
                {"name": "next", "type": 41, "optional": True},
                {"name": "value", "type": 2},
            ],
        },
        {"id": 41, "flags": "Union", "types": [6, 40]},
        # type Dictionary = { [key: string]: number }
        {
            "id": 50,
            "flags": "Object",
            "object_flags": "Anonymous",
            "string_index": 2,
            "display": "Dictionary",
        },
        # type Shape = "circle" | "square"
        {"id": 60, "flags": "Union", "types": [61, 62]},
        {"id": 61, "flags": "StringLiteral", "value": "circle"},
        {"id": 62, "flags": "StringLiteral", "value": "square"},
        # interface Options { verbose?: boolean }
        {
            "id": 70,
            "flags": "Object",
            "object_flags": "Interface",
            "symbol": {"name": "Options", "flags": "Interface"},
            "members": [{"name": "verbose", "type": 3, "optional": True}],
        },
        # interface Event { at: Date }
        {
            "id": 80,
            "flags": "Object",
            "object_flags": "Interface",
            "symbol": {"name": "Date", "flags": "Interface"},
            "display": "Date",
            "members": [{"name": "getTime", "type": 16, "flags": "Method"}],
        },
        {
            "id": 81,
            "flags": "Object",
            "object_flags": "Interface",
            "symbol": {"name": "Event", "flags": "Interface"},
            "members": [{"name": "at", "type": 80}],
        },
        # interface Box<T> { value: T }
        {"id": 90, "flags": "TypeParameter", "symbol": {"name": "T", "flags": "TypeParameter"}},
        {
            "id": 91,
            "flags": "Object",
            "object_flags": "Interface",
            "symbol": {"name": "Box", "flags": "Interface"},
            "members": [{"name": "value", "type": 90}],
        },
        # type Mixed = string | null | "circle" | true | false
        {"id": 100, "flags": "Union", "types": [1, 7, 61, 4, 5]},
        # type Named = { name: string } & { age: number }
        {"id": 110, "flags": "Intersection", "types": [111, 112]},
        {
            "id": 111,
            "flags": "Object",
            "object_flags": "Anonymous",
            "members": [{"name": "name", "type": 1}],
        },
        {
            "id": 112,
            "flags": "Object",
            "object_flags": "Anonymous",
            "members": [{"name": "age", "type": 2}, {"name": "name", "type": 61, "optional": True}],
        },
        # type Big = 10n
        {"id": 120, "flags": "BigIntLiteral", "value": {"negative": False, "base10_value": "10"}},
        # type Mystery = unknown
        {"id": 130, "flags": "Unknown", "intrinsic_name": "unknown"},
        # class Account
        {
            "id": 140,
            "flags": "Object",
            "object_flags": "Class",
            "symbol": {"name": "Account", "flags": "Class"},
            "members": [
                {"name": "id", "type": 1},
                {"name": "secret", "type": 1, "modifiers": ["private"]},
                {"name": "balance", "type": 1, "flags": "GetAccessor", "accessor_type": 2},
                {"name": "prototype", "type": 141, "flags": "Prototype"},
            ],
        },
        {"id": 141, "flags": "Object", "object_flags": "Anonymous"},
    ],
    "declarations": [
        {"name": "Person", "kind": "interface", "type": 20},
        {"name": "Color", "kind": "enum", "type": 30},
        {"name": "Node", "kind": "type_alias", "type": 40},
        {"name": "Dictionary", "kind": "type_alias", "type": 50},
        {"name": "Shape", "kind": "type_alias", "type": 60},
        {"name": "Options", "kind": "interface", "type": 70},
        {"name": "Event", "kind": "interface", "type": 81},
        {"name": "Box", "kind": "interface", "type": 91},
        {"name": "Mixed", "kind": "type_alias", "type": 100},
        {"name": "Named", "kind": "type_alias", "type": 110},
        {"name": "Big", "kind": "type_alias", "type": 120},
        {"name": "Mystery", "kind": "type_alias", "type": 130},
        {"name": "Account", "kind": "class", "type": 140},
        {"name": "Nothing", "kind": "type_alias", "type": 8},
        {"name": "Anything", "kind": "type_alias", "type": 9},
        {"name": "Large", "kind": "type_alias", "type": 10},
        {"name": "Pair", "kind": "type_alias", "type": 12},
        {"name": "Names", "kind": "type_alias", "type": 11},
        {"name": "greet", "kind": "function", "type": 16},
    ],
}


@pytest.fixture()
def shapes_graph() -> TypeGraphDocument:
    return TypeGraphDocument(**SHAPES_GRAPH)


@pytest.fixture()
def checker(shapes_graph: TypeGraphDocument) -> DocumentChecker:
    return DocumentChecker(shapes_graph)
