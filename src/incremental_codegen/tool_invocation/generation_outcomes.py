"""Normalized generator results."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class CountOnly:
    """The generator reported how many files changed, not which."""

    count: int

    @property
    def changed_count(self) -> int:
        return self.count


@dataclass(frozen=True)
class FileList:
    """The generator reported the changed files.

    A `None` entry stands for "the whole base directory changed".
    """

    files: tuple[Path | None, ...]

    @property
    def changed_count(self) -> int:
        return len(self.files)


GenerationOutcome = CountOnly | FileList
