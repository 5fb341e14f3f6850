"""Generator lookup from project-supplied import roots."""

from __future__ import annotations

import importlib
import logging
import sys
import threading
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from pathlib import Path

from .invocation_errors import GenerationConfigError
from .tool_adapters import ToolAdapter, bind_tool

logger = logging.getLogger(__name__)


class ToolResolver:
    """Loads the generator named by an entry point and binds its adapter.

    The first `resolve` call imports and probes the generator; later calls
    return the same adapter. One resolver is owned by whoever composes the
    run, so repeated runs in a long-lived process pay the lookup cost once.
    """

    def __init__(self, entry_point: str, search_paths: Sequence[Path] = ()) -> None:
        module_name, separator, attribute = entry_point.partition(":")
        if not separator or not module_name or not attribute:
            raise ValueError(
                f"Entry point must look like 'package.module:ClassName': {entry_point}"
            )
        self._entry_point = entry_point
        self._module_name = module_name
        self._attribute = attribute
        self._search_paths = tuple(search_paths)
        self._lock = threading.Lock()
        self._resolved = False
        self._adapter: ToolAdapter | None = None

    @property
    def entry_point(self) -> str:
        return self._entry_point

    def resolve(self) -> ToolAdapter | None:
        """Return the bound adapter, or None when the generator is not importable."""
        with self._lock:
            if not self._resolved:
                self._adapter = self._load()
                self._resolved = True
            return self._adapter

    def _load(self) -> ToolAdapter | None:
        logger.debug("Finding %s in %s", self._entry_point, self._search_paths or "sys.path")
        try:
            with _import_roots(self._search_paths):
                module = importlib.import_module(self._module_name)
        except ModuleNotFoundError as exc:
            if not self._names_generator_module(exc.name):
                raise GenerationConfigError(
                    f"Error loading generator {self._entry_point}: {exc}"
                ) from exc
            logger.debug("Import of %s failed: %s", self._module_name, exc)
            return None
        except Exception as exc:  # pylint: disable=broad-exception-caught
            raise GenerationConfigError(
                f"Error loading generator {self._entry_point}: {exc}"
            ) from exc
        tool_class = getattr(module, self._attribute, None)
        if tool_class is None:
            logger.debug("Module %s has no attribute %s", self._module_name, self._attribute)
            return None
        return bind_tool(tool_class)

    def _names_generator_module(self, missing: str | None) -> bool:
        """True when `missing` is the generator module itself or one of its packages."""
        if missing is None:
            return True
        return missing == self._module_name or self._module_name.startswith(f"{missing}.")


@contextmanager
def _import_roots(paths: Sequence[Path]) -> Iterator[None]:
    added = [str(path) for path in paths if str(path) not in sys.path]
    sys.path[:0] = added
    importlib.invalidate_caches()
    try:
        yield
    finally:
        for entry in added:
            if entry in sys.path:
                sys.path.remove(entry)
