"""
typegraph_schema
================

Derive JSON Schema documents from a static type graph (interfaces, type
aliases, enums, classes) exposed by a type checker.
"""

from importlib.metadata import PackageNotFoundError, version


def get_version() -> str:
    """Return the installed package version or '0.0.0' when unavailable."""
    try:
        return version("typegraph-schema")
    except PackageNotFoundError:
        return "0.0.0"


__all__ = ["get_version"]
