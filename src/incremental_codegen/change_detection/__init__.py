"""Change detection exports."""

from .change_sets import ChangeKind, ChangeSet
from .changed_file_detector import detect, select_target

__all__ = ["ChangeKind", "ChangeSet", "detect", "select_target"]
