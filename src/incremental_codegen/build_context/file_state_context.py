"""Build context persisted to a YAML state file next to the project."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

_STATE_VERSION = 1


class BuildStateError(Exception):
    """Raised when the persisted build state cannot be read."""


@dataclass(frozen=True)
class ProblemMarker:
    """One problem recorded against a file."""

    line: int
    message: str


@dataclass(frozen=True)
class _Fingerprint:
    mtime_ns: int
    size: int


class FileStateBuildContext:
    """Incremental build context that remembers file fingerprints between runs.

    Detection is pure: `changed_files` compares the filesystem with the last
    recorded snapshot and never updates it. The snapshot only moves forward
    through `refresh` and `record_snapshot`, and only reaches disk on `save`.
    """

    def __init__(self, state_path: Path, *, problems_inline: bool = False) -> None:
        self._state_path = state_path
        self._problems_inline = problems_inline
        self._fingerprints: dict[str, _Fingerprint] = {}
        self._messages: dict[str, list[ProblemMarker]] = {}
        self._values: dict[str, str] = {}
        self._refreshed: list[Path] = []
        self._load()

    @property
    def is_incremental(self) -> bool:
        return True

    @property
    def reports_problems_inline(self) -> bool:
        return self._problems_inline

    @property
    def refreshed_paths(self) -> tuple[Path, ...]:
        """Paths handed to `refresh` during this run, in call order."""
        return tuple(self._refreshed)

    def changed_files(self, base_dir: Path, pattern: str) -> list[Path]:
        changed = []
        for path in _matching_files(base_dir, pattern):
            if self._fingerprints.get(_key(path)) != _fingerprint(path):
                changed.append(path)
        return changed

    def remove_messages(self, path: Path) -> None:
        self._messages.pop(_key(path), None)

    def add_message(self, path: Path, line: int, message: str) -> None:
        self._messages.setdefault(_key(path), []).append(ProblemMarker(line=line, message=message))

    def messages_for(self, path: Path) -> tuple[ProblemMarker, ...]:
        return tuple(self._messages.get(_key(path), ()))

    def all_messages(self) -> dict[Path, tuple[ProblemMarker, ...]]:
        return {Path(key): tuple(markers) for key, markers in self._messages.items() if markers}

    def refresh(self, path: Path) -> None:
        self._refreshed.append(path)
        if path.is_dir():
            for child in _matching_files(path, "**/*"):
                self._fingerprints[_key(child)] = _fingerprint(child)
        elif path.is_file():
            self._fingerprints[_key(path)] = _fingerprint(path)
        else:
            self._fingerprints.pop(_key(path), None)

    def get_value(self, key: str) -> str | None:
        return self._values.get(key)

    def set_value(self, key: str, value: str | None) -> None:
        if value is None:
            self._values.pop(key, None)
        else:
            self._values[key] = value

    def record_snapshot(self, base_dir: Path, pattern: str) -> None:
        """Accept the current content of every matching file under `base_dir`."""
        for path in _matching_files(base_dir, pattern):
            self._fingerprints[_key(path)] = _fingerprint(path)

    def save(self) -> None:
        document = {
            "version": _STATE_VERSION,
            "fingerprints": {
                key: [value.mtime_ns, value.size]
                for key, value in sorted(self._fingerprints.items())
            },
            "messages": {
                key: [{"line": marker.line, "message": marker.message} for marker in markers]
                for key, markers in sorted(self._messages.items())
                if markers
            },
            "values": dict(sorted(self._values.items())),
        }
        self._state_path.parent.mkdir(parents=True, exist_ok=True)
        temporary = self._state_path.with_name(self._state_path.name + ".tmp")
        temporary.write_text(yaml.safe_dump(document, sort_keys=False), encoding="utf-8")
        temporary.replace(self._state_path)
        logger.debug("Build state written to %s", self._state_path)

    def _load(self) -> None:
        if not self._state_path.exists():
            return
        try:
            parsed = yaml.safe_load(self._state_path.read_text(encoding="utf-8"))
        except yaml.YAMLError as exc:
            raise BuildStateError(f"Failed to parse build state {self._state_path}: {exc}") from exc
        if parsed is None:
            return
        if not isinstance(parsed, Mapping):
            raise BuildStateError(f"Build state {self._state_path} must be a mapping.")
        try:
            self._fingerprints = {
                str(key): _Fingerprint(mtime_ns=int(value[0]), size=int(value[1]))
                for key, value in _section(parsed, "fingerprints").items()
            }
            self._messages = {
                str(key): [
                    ProblemMarker(line=int(item["line"]), message=str(item["message"]))
                    for item in items
                ]
                for key, items in _section(parsed, "messages").items()
            }
        except (TypeError, KeyError, IndexError, ValueError) as exc:
            raise BuildStateError(f"Build state {self._state_path} is malformed: {exc}") from exc
        self._values = {str(key): str(value) for key, value in _section(parsed, "values").items()}


class FullBuildContext(FileStateBuildContext):
    """Same bookkeeping as `FileStateBuildContext` but reports no change information."""

    @property
    def is_incremental(self) -> bool:
        return False


def _section(parsed: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    value = parsed.get(name) or {}
    if not isinstance(value, Mapping):
        raise BuildStateError(f"Build state section '{name}' must be a mapping.")
    return value


def _matching_files(base_dir: Path, pattern: str) -> list[Path]:
    if not base_dir.is_dir():
        return []
    return sorted(path for path in base_dir.glob(pattern) if path.is_file())


def _fingerprint(path: Path) -> _Fingerprint:
    stat = path.stat()
    return _Fingerprint(mtime_ns=stat.st_mtime_ns, size=stat.st_size)


def _key(path: Path) -> str:
    return str(path.resolve())
