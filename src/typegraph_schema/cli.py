"""Command-line utilities for the typegraph_schema package."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated

import typer
import ujson as json
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from . import get_version
from .api import convert_file, load_graph
from .checker import is_transpilable
from .classifier import classify
from .config import ConverterConfig, load_config
from .errors import TypeGraphError, TypeGraphSchemaError
from .graph import DocumentChecker
from .resolver import resolve_declarations

app = typer.Typer(help="Derive JSON Schema from serialized type graphs")
console = Console()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _load_config(path: Path | None) -> ConverterConfig:
    if path is None:
        return ConverterConfig()
    try:
        return load_config(path)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc


def _load_checker(graph: Path) -> DocumentChecker:
    try:
        return DocumentChecker(load_graph(graph))
    except TypeGraphError as exc:
        raise typer.BadParameter(str(exc)) from exc


@app.command()
def version() -> None:
    """Print the installed package version."""
    typer.echo(get_version())


@app.command("convert")
def convert_cmd(
    graph: Annotated[Path, typer.Argument(..., exists=True, readable=True)],
    out: Annotated[Path, typer.Option(help="Directory receiving the schema files.")] = Path(
        "schemas"
    ),
    config: Annotated[
        Path | None, typer.Option(exists=True, readable=True, help="YAML/JSON converter config.")
    ] = None,
    bundle: Annotated[
        bool | None, typer.Option("--bundle/--no-bundle", help="Write one bundled document.")
    ] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v")] = False,
) -> None:
    """Convert every transpilable declaration of GRAPH into JSON Schema files."""
    _configure_logging(verbose)
    cfg = _load_config(config)
    if bundle is not None:
        try:
            cfg = ConverterConfig(
                resolver=cfg.resolver,
                output=cfg.output.model_copy(update={"bundle": bundle}),
            )
        except ValidationError as exc:
            raise typer.BadParameter(str(exc)) from exc
    try:
        results, written = convert_file(graph, out, cfg)
    except TypeGraphError as exc:
        raise typer.BadParameter(str(exc)) from exc

    table = Table(title=f"Schemas ({graph})")
    table.add_column("Declaration")
    table.add_column("Kind")
    table.add_column("Status")
    for result in results:
        status = "[green]ok[/]" if result.ok else f"[red]{escape(str(result.error))}[/]"
        table.add_row(result.name, result.kind, status)
    console.print(table)
    console.print(f"[bold green]Files written:[/] {len(written)} -> {out}")
    if any(not result.ok for result in results):
        raise typer.Exit(code=1)


@app.command("classify")
def classify_cmd(graph: Annotated[Path, typer.Argument(..., exists=True, readable=True)]) -> None:
    """Print the shape variant of every node in GRAPH."""
    checker = _load_checker(graph)
    table = Table(title=f"Type nodes ({graph})")
    table.add_column("ID")
    table.add_column("Type")
    table.add_column("Kind")
    for node in checker.document.nodes:
        try:
            kind = classify(checker, node).value
        except TypeGraphSchemaError as exc:
            kind = f"[red]{escape(str(exc))}[/]"
        table.add_row(str(node.id), escape(checker.type_to_string(node)), kind)
    console.print(table)


@app.command("inspect")
def inspect_cmd(
    graph: Annotated[Path, typer.Argument(..., exists=True, readable=True)],
    name: Annotated[str, typer.Argument(help="Declaration to print.")],
    config: Annotated[Path | None, typer.Option(exists=True, readable=True)] = None,
) -> None:
    """Print the schema of a single declaration to stdout."""
    cfg = _load_config(config)
    checker = _load_checker(graph)
    declarations = [
        decl for decl in checker.declarations() if decl.name == name and is_transpilable(decl)
    ]
    if not declarations:
        raise typer.BadParameter(f"Declaration {name} not found in {graph}")
    match = resolve_declarations(checker, declarations, cfg.resolver)[0]
    if not match.ok:
        console.print(f"[red]{escape(str(match.error))}[/]")
        raise typer.Exit(code=1)
    typer.echo(json.dumps(match.schema, indent=2, escape_forward_slashes=False))


def main() -> None:
    """Entry point for `python -m typegraph_schema.cli`."""
    app()


if __name__ == "__main__":
    main()
