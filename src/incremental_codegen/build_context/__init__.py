"""Host build-context exports."""

from .file_state_context import (
    BuildStateError,
    FileStateBuildContext,
    FullBuildContext,
    ProblemMarker,
)
from .host_protocol import MARKER_KEY, BuildContext, ChangeOracle

__all__ = [
    "MARKER_KEY",
    "BuildContext",
    "ChangeOracle",
    "BuildStateError",
    "FileStateBuildContext",
    "FullBuildContext",
    "ProblemMarker",
]
