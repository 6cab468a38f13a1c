"""JSON Schema of the serialized type-graph format, and a dump checker.

Type-checker bridges export the schema once, then run ``validate`` on their
dumps before handing them to `typegraph-schema convert`.
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
import ujson as json

from typegraph_schema.errors import TypeGraphError
from typegraph_schema.graph import TypeGraphDocument, load_type_graph

app = typer.Typer(help="Export or check the `TypeGraphDocument` format.")


@app.command("export")
def export(
    out: Annotated[Path, typer.Argument(help="Output path (usually .json).")],
    pretty: Annotated[bool, typer.Option(help="Write pretty-printed JSON.")] = True,
) -> None:
    schema = TypeGraphDocument.model_json_schema()
    out.write_text(json.dumps(schema, indent=2 if pretty else 0, escape_forward_slashes=False))
    typer.echo(f"Wrote type graph schema to {out}")


@app.command("validate")
def validate(
    graphs: Annotated[list[Path], typer.Argument(exists=True, readable=True)],
) -> None:
    """Load every GRAPHS dump, including its node reference checks."""
    failed = 0
    for path in graphs:
        try:
            document = load_type_graph(path)
        except TypeGraphError as exc:
            cause = exc.__cause__
            typer.echo(f"FAIL {path}: {exc}" + (f"\n{cause}" if cause else ""), err=True)
            failed += 1
            continue
        summary = document.summary()
        typer.echo(f"ok   {path}: {summary['nodes']} nodes, {sum(summary['declarations'].values())} declarations")
    if failed:
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
