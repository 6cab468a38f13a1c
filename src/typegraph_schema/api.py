"""Public API for downstream modules."""

from __future__ import annotations

import logging
from pathlib import Path

import ujson as json

from .checker import TypeChecker
from .config import ConverterConfig, OutputConfig, ResolverConfig
from .graph import DocumentChecker, TypeGraphDocument, load_type_graph, save_type_graph
from .resolver import DeclarationResult, resolve_declarations
from .schema import JsonSchema, build_document

__all__ = [
    "TypeGraphDocument",
    "load_graph",
    "save_graph",
    "convert",
    "convert_checker",
    "collect_schemas",
    "write_schemas",
    "convert_file",
]

logger = logging.getLogger(__name__)


def load_graph(path: str | Path) -> TypeGraphDocument:
    """Read a serialized type graph from disk."""
    return load_type_graph(path)


def save_graph(document: TypeGraphDocument, path: str | Path) -> None:
    """Persist a serialized type graph to disk."""
    save_type_graph(document, path)


def convert_checker(
    checker: TypeChecker,
    config: ResolverConfig | None = None,
) -> list[DeclarationResult]:
    """Resolve every transpilable declaration the checker exposes."""
    return resolve_declarations(checker, config=config)


def convert(
    document: TypeGraphDocument,
    config: ResolverConfig | None = None,
) -> list[DeclarationResult]:
    """Resolve every transpilable declaration of a serialized graph."""
    return convert_checker(DocumentChecker(document), config)


def collect_schemas(results: list[DeclarationResult]) -> dict[str, JsonSchema]:
    """Map declaration name to schema, dropping failed declarations.

    When two declarations share a name the first one wins.
    """
    schemas: dict[str, JsonSchema] = {}
    for result in results:
        if not result.ok or result.schema is None:
            continue
        if result.name in schemas:
            logger.warning("Duplicate declaration %s (%s) ignored", result.name, result.kind)
            continue
        schemas[result.name] = result.schema
    return schemas


def write_schemas(
    results: list[DeclarationResult],
    out_dir: str | Path,
    output: OutputConfig | None = None,
) -> list[Path]:
    """Write one ``<name>.json`` per declaration, or a single bundled document."""
    output = output or OutputConfig()
    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    indent = 2 if output.pretty else 0
    schemas = collect_schemas(results)
    if output.bundle:
        path = out_dir / "schemas.json"
        document = build_document(schemas, output.schema_uri)
        path.write_text(json.dumps(document, indent=indent, escape_forward_slashes=False))
        logger.info("Wrote %d definitions to %s", len(schemas), path)
        return [path]
    written = []
    for name, schema in schemas.items():
        payload = {"$schema": output.schema_uri, **schema} if isinstance(schema, dict) else schema
        path = out_dir / f"{name}.json"
        path.write_text(json.dumps(payload, indent=indent, escape_forward_slashes=False))
        written.append(path)
    logger.info("Wrote %d schema files to %s", len(written), out_dir)
    return written


def convert_file(
    graph_path: str | Path,
    out_dir: str | Path,
    config: ConverterConfig | None = None,
) -> tuple[list[DeclarationResult], list[Path]]:
    """Entry point used by the CLI: load, resolve and write in one go."""
    config = config or ConverterConfig()
    document = load_graph(graph_path)
    logger.debug("Loaded type graph %s: %s", graph_path, document.summary())
    results = convert(document, config.resolver)
    written = write_schemas(results, out_dir, config.output)
    return results, written
