"""Run execution entities."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class RunRequest:
    """Input contract for executing one goal."""

    config_path: str
    state_file: str | None = None
    full_build: bool = False
    stop_on_error: bool | None = None


@dataclass(frozen=True)
class SourceRoot:
    """One source directory and the compiled-output directory mirroring it."""

    source_dir: Path
    classes_dir: Path | None
