"""Generate and validate goal use-case services."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import replace
from pathlib import Path

from incremental_codegen.build_context import (
    MARKER_KEY,
    BuildContext,
    BuildStateError,
    FileStateBuildContext,
    FullBuildContext,
)
from incremental_codegen.change_detection import ChangeSet, detect, select_target
from incremental_codegen.configuration import (
    Configuration,
    ConfigurationError,
    load_configuration,
)
from incremental_codegen.error_translation import translate
from incremental_codegen.result_reporting import (
    ArtifactPurge,
    RunResult,
    report_generation,
    report_validation,
)
from incremental_codegen.tool_invocation import (
    GenerationConfigError,
    GenerationToolError,
    ToolAdapter,
    ToolResolver,
    build_generation_request,
)

from .run_contracts import RunRequest, SourceRoot

logger = logging.getLogger(__name__)

ResolverFactory = Callable[[Configuration], ToolResolver]


class RunExecutionError(Exception):
    """Raised when a goal cannot be started or its build state cannot be kept."""


def execute_generate_goal(
    request: RunRequest,
    *,
    resolver_factory: ResolverFactory | None = None,
) -> RunResult:
    """Load configuration and build state, run the generate goal and persist the state."""
    try:
        configuration = load_configuration(request.config_path)
    except ConfigurationError as exc:
        return RunResult.config_error(str(exc))
    state_path = Path(request.state_file) if request.state_file else configuration.build.state_file
    context_cls = FullBuildContext if request.full_build else FileStateBuildContext
    try:
        context = context_cls(state_path, problems_inline=configuration.build.problems_inline)
    except BuildStateError as exc:
        raise RunExecutionError(str(exc)) from exc

    resolver = (resolver_factory or default_resolver)(configuration)
    result = run_generation(configuration, context, resolver)
    if result.generator_ran:
        for root in source_roots(configuration):
            context.record_snapshot(root.source_dir, configuration.sources.include)
    try:
        context.save()
    except OSError as exc:
        raise RunExecutionError(f"Unable to write build state {state_path}: {exc}") from exc
    return result


def execute_validate_goal(
    request: RunRequest,
    *,
    resolver_factory: ResolverFactory | None = None,
) -> RunResult:
    """Load configuration and run the validate goal."""
    try:
        configuration = load_configuration(request.config_path)
    except ConfigurationError as exc:
        return RunResult.config_error(str(exc))
    stop_on_error = (
        configuration.validation.stop_on_error
        if request.stop_on_error is None
        else request.stop_on_error
    )
    resolver = (resolver_factory or default_resolver)(configuration)
    return run_validation(configuration, resolver, stop_on_error=stop_on_error)


def default_resolver(configuration: Configuration) -> ToolResolver:
    return ToolResolver(configuration.tool.entry_point, configuration.tool.paths)


def source_roots(configuration: Configuration) -> list[SourceRoot]:
    sources = configuration.sources
    roots = [SourceRoot(source_dir=sources.source_dir, classes_dir=sources.classes_dir)]
    if sources.test_source_dir is not None:
        roots.append(
            SourceRoot(source_dir=sources.test_source_dir, classes_dir=sources.test_classes_dir)
        )
    return roots


def run_generation(
    configuration: Configuration, context: BuildContext, resolver: ToolResolver
) -> RunResult:
    """Regenerate whatever changed in the source roots since the last run."""
    if configuration.build.skip:
        logger.info("Skipping generation, build.skip is set")
        return RunResult.success()
    try:
        adapter = _resolve_adapter(resolver)
    except GenerationConfigError as exc:
        return RunResult.config_error(str(exc))
    if adapter is None:
        return RunResult.success()

    pattern = configuration.sources.include
    pending = [
        (root, change_set)
        for root in source_roots(configuration)
        if not (change_set := detect(root.source_dir, context, pattern)).is_empty
    ]
    if not pending:
        logger.info("No files changed")
        return RunResult.success()

    logger.info(
        "Generator started, directories: %s",
        ", ".join(str(root.source_dir) for root, _ in pending),
    )
    _clear_previous_marker(context)
    result = RunResult.success()
    for root, change_set in pending:
        result = result.plus(_generate_root(configuration, context, adapter, root, change_set))
        if not result.succeeded:
            return result
    logger.info("Generator completed, %d changed files", result.changed_count)
    if result.diagnostics:
        return result
    return replace(result, generator_ran=True)


def run_validation(
    configuration: Configuration, resolver: ToolResolver, *, stop_on_error: bool
) -> RunResult:
    """Run the generator without writing and fail when any source is out of date."""
    if configuration.build.skip:
        logger.info("Skipping validation, build.skip is set")
        return RunResult.success()
    if not configuration.sources.source_dir.is_dir():
        return RunResult.config_error(
            f"Source directory not found: {configuration.sources.source_dir}"
        )
    try:
        adapter = _resolve_adapter(resolver)
    except GenerationConfigError as exc:
        return RunResult.config_error(str(exc))
    if adapter is None:
        return RunResult.success()

    result = RunResult.success()
    for root in source_roots(configuration):
        if not root.source_dir.is_dir():
            logger.debug("Skipping missing directory %s", root.source_dir)
            continue
        logger.info("Validator started, directory: %s", root.source_dir)
        request = build_generation_request(
            configuration.generator, root.source_dir, dry_run=True
        )
        try:
            outcome = adapter.generate(request)
        except GenerationConfigError as exc:
            return RunResult.config_error(str(exc))
        except GenerationToolError as exc:
            return RunResult.tool_error(
                f"Error while running generator: {exc.message}",
                translate(exc, fallback_file=root.source_dir),
            )
        result = result.plus(report_validation(outcome, stop_on_error=stop_on_error))
        if not result.succeeded:
            return result
    if result.changed_count == 0:
        logger.info("Validator completed")
    return result


def _resolve_adapter(resolver: ToolResolver) -> ToolAdapter | None:
    adapter = resolver.resolve()
    if adapter is None:
        logger.info("Skipping as %s is not importable", resolver.entry_point)
    return adapter


def _clear_previous_marker(context: BuildContext) -> None:
    previous = context.get_value(MARKER_KEY)
    if previous:
        context.remove_messages(Path(previous))
        context.set_value(MARKER_KEY, None)


def _generate_root(
    configuration: Configuration,
    context: BuildContext,
    adapter: ToolAdapter,
    root: SourceRoot,
    change_set: ChangeSet,
) -> RunResult:
    for changed in sorted(change_set.paths):
        context.remove_messages(changed)
    target = select_target(root.source_dir, change_set)
    if target == root.source_dir:
        logger.debug("All files: %s", target)
    else:
        logger.debug("Single file: %s", target)
    request = build_generation_request(configuration.generator, target)
    try:
        outcome = adapter.generate(request)
    except GenerationConfigError as exc:
        return RunResult.config_error(str(exc))
    except GenerationToolError as exc:
        return _report_tool_error(exc, context, root.source_dir)
    return report_generation(
        outcome,
        context,
        root.source_dir,
        artifact_purge=_artifact_purge(configuration, root),
    )


def _report_tool_error(
    error: GenerationToolError, context: BuildContext, source_dir: Path
) -> RunResult:
    diagnostic = translate(error, fallback_file=source_dir)
    context.add_message(diagnostic.file, diagnostic.reported_line, diagnostic.message)
    context.set_value(MARKER_KEY, str(diagnostic.file))
    if context.reports_problems_inline:
        logger.debug("Generator error recorded as a problem marker: %s", diagnostic.message)
        return RunResult.success(diagnostics=(diagnostic,))
    return RunResult.tool_error(f"Error while running generator: {error.message}", diagnostic)


def _artifact_purge(configuration: Configuration, root: SourceRoot) -> ArtifactPurge | None:
    if not configuration.build.purge_compiled_artifacts or root.classes_dir is None:
        return None
    return ArtifactPurge(
        classes_dir=root.classes_dir,
        compiled_suffix=configuration.sources.compiled_suffix,
    )
