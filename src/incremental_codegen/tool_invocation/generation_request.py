"""Generator argument vector construction."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from incremental_codegen.configuration.runtime_settings import GeneratorOptions

RECURSE_FLAG = "-R"
NO_WRITE_FLAG = "-nowrite"


@dataclass(frozen=True)
class GenerationRequest:
    """Ordered command-line style arguments for one generator call."""

    args: tuple[str, ...]

    @property
    def target(self) -> str:
        return self.args[-1]


def build_generation_request(
    options: GeneratorOptions, target: Path, *, dry_run: bool = False
) -> GenerationRequest:
    """Build the flags for `options` followed by the target path."""
    args = [RECURSE_FLAG]
    if options.indent is not None:
        args.append(f"-indent={options.indent}")
    if options.prefix is not None:
        args.append(f"-prefix={options.prefix}")
    if options.config is not None:
        args.append(f"-config={options.config}")
    if options.verbose is not None:
        args.append(f"-verbose={options.verbose}")
    if dry_run:
        args.append(NO_WRITE_FLAG)
    args.append(str(target))
    return GenerationRequest(args=tuple(args))
