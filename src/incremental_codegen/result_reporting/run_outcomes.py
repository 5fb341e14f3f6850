"""Run result domain entities."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from incremental_codegen.error_translation.diagnostics import Diagnostic


class RunStatus(str, Enum):
    """Final state of one generate or validate run."""

    SUCCESS = "success"
    VALIDATION_FAILED = "validation_failed"
    TOOL_ERROR = "tool_error"
    CONFIG_ERROR = "config_error"


@dataclass(frozen=True)
class RunResult:
    """Outcome reported back to the caller of a run.

    `generator_ran` is only set when every pending source root went through the
    generator without a recorded problem.
    """

    status: RunStatus
    changed_count: int = 0
    message: str | None = None
    changed_files: tuple[Path, ...] = ()
    diagnostics: tuple[Diagnostic, ...] = ()
    generator_ran: bool = False

    @property
    def succeeded(self) -> bool:
        return self.status is RunStatus.SUCCESS

    @staticmethod
    def success(
        changed_count: int = 0,
        changed_files: tuple[Path, ...] = (),
        diagnostics: tuple[Diagnostic, ...] = (),
    ) -> RunResult:
        return RunResult(
            status=RunStatus.SUCCESS,
            changed_count=changed_count,
            changed_files=changed_files,
            diagnostics=diagnostics,
        )

    @staticmethod
    def validation_failed(changed_count: int, changed_files: tuple[Path, ...] = ()) -> RunResult:
        return RunResult(
            status=RunStatus.VALIDATION_FAILED,
            changed_count=changed_count,
            message=f"Some sources need to be re-generated ({changed_count} files)",
            changed_files=changed_files,
        )

    @staticmethod
    def tool_error(message: str, diagnostic: Diagnostic) -> RunResult:
        return RunResult(status=RunStatus.TOOL_ERROR, message=message, diagnostics=(diagnostic,))

    @staticmethod
    def config_error(message: str) -> RunResult:
        return RunResult(status=RunStatus.CONFIG_ERROR, message=message)

    def plus(self, other: RunResult) -> RunResult:
        """Merge the result of a later source root into this one.

        Counts, files and diagnostics accumulate; the first failure wins.
        """
        decisive = other if self.succeeded else self
        return RunResult(
            status=decisive.status,
            changed_count=self.changed_count + other.changed_count,
            message=decisive.message,
            changed_files=_merge_unique(self.changed_files, other.changed_files),
            diagnostics=self.diagnostics + other.diagnostics,
            generator_ran=self.generator_ran or other.generator_ran,
        )


def _merge_unique(first: tuple[Path, ...], second: tuple[Path, ...]) -> tuple[Path, ...]:
    return tuple(dict.fromkeys(first + second))
