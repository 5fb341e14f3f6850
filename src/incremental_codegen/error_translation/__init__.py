"""Error translation exports."""

from .diagnostics import Diagnostic
from .message_translator import MESSAGE_PATTERN, MESSAGE_PREFIX, translate

__all__ = ["Diagnostic", "MESSAGE_PATTERN", "MESSAGE_PREFIX", "translate"]
