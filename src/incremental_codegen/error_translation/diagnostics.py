"""Diagnostic domain entity."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class Diagnostic:
    """Problem location and message produced from a generator failure."""

    file: Path
    line: int
    message: str

    @property
    def reported_line(self) -> int:
        """Line handed to the host's problem markers, one above the parsed line."""
        return self.line + 1
