"""Error taxonomy for schema synthesis."""

from __future__ import annotations

from collections.abc import Sequence


def format_path(declaration: str | None, path: Sequence[str]) -> str:
    """Render ``Foo`` + ``["bar", "[]", "baz"]`` as ``Foo.bar[].baz``."""
    out = declaration or "<anonymous>"
    for part in path:
        if part.startswith("["):
            out += part
        else:
            out += f".{part}"
    return out


class TypeGraphSchemaError(Exception):
    """Base class for every error raised by the engine."""


class TypeGraphError(TypeGraphSchemaError, ValueError):
    """A serialized type graph is malformed."""


class ResolutionError(TypeGraphSchemaError):
    """Failure located inside a declaration."""

    def __init__(
        self,
        detail: str,
        declaration: str | None = None,
        path: Sequence[str] = (),
    ) -> None:
        self.detail = detail
        self.declaration = declaration
        self.path = tuple(path)
        super().__init__(f"{format_path(declaration, self.path)}: {detail}")


class ClassificationError(ResolutionError):
    """A type node matched no classifier predicate."""


class UnsupportedPrimitiveError(ResolutionError):
    """A primitive kind has no JSON Schema mapping."""

    def __init__(self, kind: str, declaration: str | None = None, path: Sequence[str] = ()) -> None:
        self.kind = kind
        super().__init__(f"unsupported primitive type '{kind}'", declaration, path)


class DepthExceededError(ResolutionError):
    """Resolution went deeper than the configured ceiling."""

    def __init__(self, limit: int, declaration: str | None = None, path: Sequence[str] = ()) -> None:
        self.limit = limit
        super().__init__(f"maximum resolution depth {limit} exceeded", declaration, path)
