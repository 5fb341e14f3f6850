"""Host build-context contract."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Protocol

MARKER_KEY = "incremental_codegen.last_error_file"


class ChangeOracle(Protocol):  # pylint: disable=too-few-public-methods
    """Answers "what changed since the last run" for one directory."""

    @property
    def is_incremental(self) -> bool: ...

    def changed_files(self, base_dir: Path, pattern: str) -> Sequence[Path]: ...


class BuildContext(ChangeOracle, Protocol):
    """Incremental-build and problem-reporting surface of the host build tool."""

    @property
    def reports_problems_inline(self) -> bool: ...

    def remove_messages(self, path: Path) -> None: ...

    def add_message(self, path: Path, line: int, message: str) -> None: ...

    def refresh(self, path: Path) -> None: ...

    def get_value(self, key: str) -> str | None: ...

    def set_value(self, key: str, value: str | None) -> None: ...
