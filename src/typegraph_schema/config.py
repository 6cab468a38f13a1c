"""Typed configuration for resolution passes and schema output."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import ujson as json
import yaml
from pydantic import BaseModel, Field, ValidationError, model_validator

from .schema import DRAFT_07


class ResolverConfig(BaseModel):
    """Knobs of one resolution pass."""

    cycle_policy: Literal["placeholder", "ref"] = "placeholder"
    max_depth: int = Field(default=128, gt=0)
    dates_as_strings: bool = True
    skip_private: bool = True


class OutputConfig(BaseModel):
    """How resolved schemas are written to disk."""

    bundle: bool = False
    pretty: bool = True
    schema_uri: str = DRAFT_07


class ConverterConfig(BaseModel):
    """Top-level config file entity."""

    resolver: ResolverConfig = Field(default_factory=ResolverConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)

    @model_validator(mode="after")
    def validate_refs_are_bundled(self) -> ConverterConfig:
        if self.resolver.cycle_policy == "ref" and not self.output.bundle:
            raise ValueError("resolver.cycle_policy=ref requires output.bundle")
        return self


def load_config(path: str | Path) -> ConverterConfig:
    """Load a converter config from YAML or JSON."""
    path = Path(path)
    data: Any
    text = path.read_text()
    if path.suffix in {".yaml", ".yml"}:
        data = yaml.safe_load(text) or {}
    else:
        data = json.loads(text)
    if not isinstance(data, dict):
        raise ValueError(f"Invalid config {path}: expected a mapping")
    try:
        return ConverterConfig(**data)
    except ValidationError as exc:
        raise ValueError(f"Invalid config {path}") from exc


def save_config(config: ConverterConfig, path: str | Path) -> None:
    path = Path(path)
    if path.suffix in {".yaml", ".yml"}:
        path.write_text(yaml.safe_dump(config.model_dump(mode="python"), sort_keys=False))
    else:
        path.write_text(json.dumps(config.model_dump(mode="python"), indent=2))
