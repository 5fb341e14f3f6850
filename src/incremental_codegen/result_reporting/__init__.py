"""Result reporting exports."""

from .result_reporter import ArtifactPurge, report_generation, report_validation
from .run_outcomes import RunResult, RunStatus

__all__ = [
    "ArtifactPurge",
    "RunResult",
    "RunStatus",
    "report_generation",
    "report_validation",
]
