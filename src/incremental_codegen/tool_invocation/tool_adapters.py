"""Adapters over the supported generator generations.

Two generator surfaces exist in the wild. Both are built through a
`create_from_args(args)` class method; newer generators expose
`process_files()` returning the changed files, older ones only `process()`
returning a count. `bind_tool` probes the class once and returns the adapter
for whichever surface is present.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Protocol

from .generation_outcomes import CountOnly, FileList, GenerationOutcome
from .generation_request import GenerationRequest
from .invocation_errors import GenerationConfigError, GenerationToolError

CREATE_METHOD = "create_from_args"
LISTING_METHOD = "process_files"
COUNTING_METHOD = "process"


class ToolAdapter(Protocol):  # pylint: disable=too-few-public-methods
    """Runs one generator call and normalizes its result."""

    @property
    def tool_name(self) -> str: ...

    def generate(self, request: GenerationRequest) -> GenerationOutcome: ...


class _BoundTool:
    def __init__(self, tool_class: type) -> None:
        self._tool_class = tool_class

    @property
    def tool_name(self) -> str:
        return self._tool_class.__name__

    def _create(self, request: GenerationRequest) -> Any:
        factory = getattr(self._tool_class, CREATE_METHOD)
        try:
            return factory(list(request.args))
        except SystemExit as exc:
            raise GenerationConfigError(
                f"Invalid generator configuration: generator exited with status {exc.code}"
            ) from exc
        except Exception as exc:  # pylint: disable=broad-exception-caught
            raise GenerationConfigError(f"Invalid generator configuration: {exc}") from exc


class ListingToolAdapter(_BoundTool):
    """Adapter for generators that report the changed files."""

    def generate(self, request: GenerationRequest) -> FileList:
        generator = self._create(request)
        try:
            changed = getattr(generator, LISTING_METHOD)()
        except (Exception, SystemExit) as exc:  # pylint: disable=broad-exception-caught
            raise GenerationToolError.from_exception(exc) from exc
        if changed is None:
            return FileList(files=())
        return FileList(files=tuple(_to_path(item) for item in changed))


class CountingToolAdapter(_BoundTool):
    """Adapter for generators that only report how many files changed."""

    def generate(self, request: GenerationRequest) -> CountOnly:
        generator = self._create(request)
        try:
            count = getattr(generator, COUNTING_METHOD)()
        except (Exception, SystemExit) as exc:  # pylint: disable=broad-exception-caught
            raise GenerationToolError.from_exception(exc) from exc
        if isinstance(count, bool) or not isinstance(count, int) or count < 0:
            raise GenerationToolError(
                f"{self.tool_name}.{COUNTING_METHOD}() returned an invalid change count: {count!r}"
            )
        return CountOnly(count=count)


def bind_tool(tool_class: type) -> ToolAdapter:
    """Select the adapter matching the capabilities of `tool_class`."""
    name = getattr(tool_class, "__name__", repr(tool_class))
    if not callable(getattr(tool_class, CREATE_METHOD, None)):
        raise GenerationConfigError(f"Unable to find method {name}.{CREATE_METHOD}()")
    if callable(getattr(tool_class, LISTING_METHOD, None)):
        return ListingToolAdapter(tool_class)
    if callable(getattr(tool_class, COUNTING_METHOD, None)):
        return CountingToolAdapter(tool_class)
    raise GenerationConfigError(
        f"Unable to find method {name}.{LISTING_METHOD}() or {name}.{COUNTING_METHOD}()"
    )


def _to_path(item: Any) -> Path | None:
    if item is None:
        return None
    if isinstance(item, (str, os.PathLike)):
        return Path(item)
    raise GenerationToolError(f"Generator reported a non-path changed file: {item!r}")
