import logging
from pathlib import Path

import ujson as json

from typegraph_schema import api
from typegraph_schema.config import ConverterConfig, OutputConfig, ResolverConfig
from typegraph_schema.graph import TypeGraphDocument
from typegraph_schema.resolver import DeclarationResult


def test_convert_collects_successful_schemas(shapes_graph: TypeGraphDocument) -> None:
    results = api.convert(shapes_graph)
    schemas = api.collect_schemas(results)
    assert "Person" in schemas
    assert "Mystery" not in schemas
    assert schemas["Color"] == {"enum": [1, 2, 3]}


def test_write_one_file_per_declaration(shapes_graph: TypeGraphDocument, tmp_path: Path) -> None:
    results = api.convert(shapes_graph)
    written = api.write_schemas(results, tmp_path / "out")
    names = sorted(path.stem for path in written)
    assert "Person" in names and "Big" not in names
    payload = json.loads((tmp_path / "out" / "Shape.json").read_text())
    assert payload == {
        "$schema": "http://json-schema.org/draft-07/schema#",
        "enum": ["circle", "square"],
    }


def test_bundled_output_resolves_refs(shapes_graph: TypeGraphDocument, tmp_path: Path) -> None:
    results = api.convert(shapes_graph, ResolverConfig(cycle_policy="ref"))
    written = api.write_schemas(results, tmp_path, OutputConfig(bundle=True))
    assert [path.name for path in written] == ["schemas.json"]
    document = json.loads(written[0].read_text())
    node = document["definitions"]["Node"]
    assert node["properties"]["next"] == {"$ref": "#/definitions/Node"}


def test_convert_file_end_to_end(shapes_graph: TypeGraphDocument, tmp_path: Path) -> None:
    graph_path = tmp_path / "graph.yaml"
    api.save_graph(shapes_graph, graph_path)
    results, written = api.convert_file(
        graph_path,
        tmp_path / "schemas",
        ConverterConfig(output=OutputConfig(pretty=False)),
    )
    assert len(written) == sum(1 for result in results if result.ok)
    person = json.loads((tmp_path / "schemas" / "Person.json").read_text())
    assert person["required"] == ["name", "tags", "position", "verified"]


def test_duplicate_declaration_names_keep_the_first(caplog) -> None:
    results = [
        DeclarationResult("Account", "interface", schema={"type": "object"}),
        DeclarationResult("Account", "class", schema={"type": "string"}),
    ]
    with caplog.at_level(logging.WARNING, logger="typegraph_schema.api"):
        schemas = api.collect_schemas(results)
    assert schemas == {"Account": {"type": "object"}}
    assert "Duplicate declaration Account (class)" in caplog.text
