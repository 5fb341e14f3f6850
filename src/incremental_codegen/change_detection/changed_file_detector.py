"""Changed-file detection service."""

from __future__ import annotations

import logging
from pathlib import Path

from incremental_codegen.build_context.host_protocol import ChangeOracle

from .change_sets import ChangeSet

logger = logging.getLogger(__name__)


def detect(base_dir: Path | None, oracle: ChangeOracle | None, pattern: str) -> ChangeSet:
    """Return the files under `base_dir` that need regeneration.

    A missing or unconfigured directory has nothing to regenerate. Without an
    incremental oracle every file has to be assumed changed.
    """
    if base_dir is None or not base_dir.is_dir():
        return ChangeSet.empty()
    if oracle is None or not oracle.is_incremental:
        return ChangeSet.unknown()
    changed = oracle.changed_files(base_dir, pattern)
    logger.debug("%d files changed under %s", len(changed), base_dir)
    return ChangeSet.of(changed)


def select_target(base_dir: Path, change_set: ChangeSet) -> Path:
    """Pick the generator target: the single changed file, else the whole directory."""
    if len(change_set.paths) == 1:
        (single,) = change_set.paths
        return single
    return base_dir
