"""Generator invocation exports."""

from .generation_outcomes import CountOnly, FileList, GenerationOutcome
from .generation_request import GenerationRequest, build_generation_request
from .invocation_errors import GenerationConfigError, GenerationToolError
from .tool_adapters import CountingToolAdapter, ListingToolAdapter, ToolAdapter, bind_tool
from .tool_resolver import ToolResolver

__all__ = [
    "CountOnly",
    "FileList",
    "GenerationOutcome",
    "GenerationRequest",
    "build_generation_request",
    "GenerationConfigError",
    "GenerationToolError",
    "CountingToolAdapter",
    "ListingToolAdapter",
    "ToolAdapter",
    "bind_tool",
    "ToolResolver",
]
