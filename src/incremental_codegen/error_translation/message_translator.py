"""Translate generator failure messages into diagnostics."""

from __future__ import annotations

import os
import re
from pathlib import Path

from incremental_codegen.tool_invocation.invocation_errors import GenerationToolError

from .diagnostics import Diagnostic

MESSAGE_PREFIX = "Error in bean: "
MESSAGE_PATTERN = re.compile(r"Error in bean: (.*?), Line: ([0-9]+), Message: (.*)", re.DOTALL)
_SEPARATOR = ": "


def translate(error: GenerationToolError, fallback_file: Path) -> Diagnostic:
    """Locate `error` in a source file, falling back to `fallback_file` line 1."""
    matcher = MESSAGE_PATTERN.fullmatch(error.message)
    if matcher:
        return Diagnostic(
            file=Path(matcher.group(1)),
            line=max(1, int(matcher.group(2))),
            message=matcher.group(3),
        )
    if error.message.startswith(MESSAGE_PREFIX):
        candidate = Path(error.message[len(MESSAGE_PREFIX) :])
        # os.path.exists tolerates names the OS rejects outright.
        if os.path.exists(candidate):
            message = _SEPARATOR.join(error.causes) if error.causes else error.message
            return Diagnostic(file=candidate, line=1, message=message)
    return Diagnostic(
        file=fallback_file,
        line=1,
        message=_SEPARATOR.join((error.message, *error.causes)),
    )
