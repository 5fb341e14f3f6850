"""Change detection domain entities."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class ChangeKind(str, Enum):
    """How much of a source root needs regeneration."""

    UNKNOWN = "unknown"
    EMPTY = "empty"
    PATHS = "paths"


@dataclass(frozen=True)
class ChangeSet:
    """Result of one change query against a source root."""

    kind: ChangeKind
    paths: frozenset[Path] = frozenset()

    @staticmethod
    def unknown() -> ChangeSet:
        return ChangeSet(kind=ChangeKind.UNKNOWN)

    @staticmethod
    def empty() -> ChangeSet:
        return ChangeSet(kind=ChangeKind.EMPTY)

    @staticmethod
    def of(paths: Iterable[Path]) -> ChangeSet:
        frozen = frozenset(paths)
        if not frozen:
            return ChangeSet.empty()
        return ChangeSet(kind=ChangeKind.PATHS, paths=frozen)

    @property
    def is_empty(self) -> bool:
        return self.kind is ChangeKind.EMPTY

    @property
    def is_unknown(self) -> bool:
        return self.kind is ChangeKind.UNKNOWN
