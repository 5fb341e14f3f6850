"""Run execution domain exports."""

from .generation_run_use_case import (
    RunExecutionError,
    execute_generate_goal,
    execute_validate_goal,
    run_generation,
    run_validation,
)
from .run_contracts import RunRequest, SourceRoot

__all__ = [
    "RunRequest",
    "SourceRoot",
    "RunExecutionError",
    "execute_generate_goal",
    "execute_validate_goal",
    "run_generation",
    "run_validation",
]
