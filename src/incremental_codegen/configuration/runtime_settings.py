"""Configuration domain entities."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class ToolSettings:
    """Where the generator lives and how to import it."""

    entry_point: str
    paths: tuple[Path, ...]


@dataclass(frozen=True)
class SourceSettings:
    """Source roots scanned for changes and their compiled-output mirrors."""

    source_dir: Path
    test_source_dir: Path | None
    classes_dir: Path | None
    test_classes_dir: Path | None
    include: str
    compiled_suffix: str


@dataclass(frozen=True)
class GeneratorOptions:
    """Flags forwarded to the generator argument vector."""

    indent: str | None
    prefix: str | None
    config: str | None
    verbose: int | None


@dataclass(frozen=True)
class ValidationSettings:
    """Behaviour of the validate goal."""

    stop_on_error: bool


@dataclass(frozen=True)
class BuildSettings:
    """Host integration switches."""

    skip: bool
    state_file: Path
    purge_compiled_artifacts: bool
    problems_inline: bool


@dataclass(frozen=True)
class Configuration:
    """Top-level configuration aggregate."""

    path: Path
    tool: ToolSettings
    sources: SourceSettings
    generator: GeneratorOptions
    validation: ValidationSettings
    build: BuildSettings
