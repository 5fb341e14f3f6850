"""Report generator outcomes to the host build context."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from incremental_codegen.build_context.host_protocol import BuildContext
from incremental_codegen.tool_invocation.generation_outcomes import FileList, GenerationOutcome

from .run_outcomes import RunResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ArtifactPurge:
    """Where compiled artifacts of regenerated sources live.

    Only used for hosts whose incremental compiler keeps stale output after a
    source is rewritten behind its back; purging deletes files on disk.
    """

    classes_dir: Path
    compiled_suffix: str


def report_generation(
    outcome: GenerationOutcome,
    context: BuildContext,
    base_dir: Path,
    *,
    artifact_purge: ArtifactPurge | None = None,
) -> RunResult:
    """Refresh whatever the generator changed and summarize the run."""
    if outcome.changed_count == 0:
        return RunResult.success()
    if not isinstance(outcome, FileList):
        context.refresh(base_dir)
        return RunResult.success(outcome.changed_count)

    changed_files = _unique_files(outcome.files)
    if None in outcome.files:
        context.refresh(base_dir)
    for changed in changed_files:
        context.refresh(changed)
        if artifact_purge is not None:
            _purge_compiled_artifact(changed, base_dir, artifact_purge, context)
    return RunResult.success(outcome.changed_count, changed_files)


def report_validation(outcome: GenerationOutcome, *, stop_on_error: bool) -> RunResult:
    """Turn a dry-run outcome into a validation verdict."""
    changed_count = outcome.changed_count
    changed_files = _unique_files(outcome.files) if isinstance(outcome, FileList) else ()
    if changed_count == 0:
        return RunResult.success()
    if stop_on_error:
        return RunResult.validation_failed(changed_count, changed_files)
    logger.warning("*** Validator found %d sources in need of generation ***", changed_count)
    for changed in changed_files:
        logger.warning("  %s", changed)
    return RunResult.success(changed_count, changed_files)


def _unique_files(files: Iterable[Path | None]) -> tuple[Path, ...]:
    return tuple(dict.fromkeys(path for path in files if path is not None))


def _purge_compiled_artifact(
    source_file: Path, base_dir: Path, purge: ArtifactPurge, context: BuildContext
) -> None:
    try:
        relative = source_file.resolve().relative_to(base_dir.resolve())
    except ValueError:
        logger.debug("Not purging artifact of %s, outside %s", source_file, base_dir)
        return
    artifact = purge.classes_dir / relative.with_suffix(purge.compiled_suffix)
    if artifact.exists():
        logger.debug("Deleting stale artifact %s", artifact)
        artifact.unlink()
        context.refresh(artifact)
