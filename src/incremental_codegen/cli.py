"""Command line interface entry point."""

from __future__ import annotations

import logging
import sys

import click

from incremental_codegen.configuration import (
    DEFAULT_CONFIG_FILENAME,
    write_placeholder_configuration,
)
from incremental_codegen.result_reporting import RunResult
from incremental_codegen.run_execution import (
    RunExecutionError,
    RunRequest,
    execute_generate_goal,
    execute_validate_goal,
)

_LOG_LEVELS = (logging.WARNING, logging.INFO, logging.DEBUG)


class CliError(Exception):
    """Custom CLI error."""


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="incremental-codegen")
@click.option("-v", "--verbose", count=True, help="Increase log output (-v info, -vv debug).")
def cli(verbose: int) -> None:
    """Incremental code generation runner."""
    logging.basicConfig(
        level=_LOG_LEVELS[min(verbose, len(_LOG_LEVELS) - 1)],
        format="%(levelname)s %(name)s: %(message)s",
    )


@cli.command(name="generate-config")
@click.option(
    "--output",
    "output_path",
    required=False,
    default=DEFAULT_CONFIG_FILENAME,
    show_default=True,
    type=click.Path(path_type=str),
    help="Path to the YAML runner configuration template to write",
)
def generate_config(output_path: str) -> None:
    """Generate a placeholder YAML runner configuration with guidance comments."""
    try:
        resolved_output = write_placeholder_configuration(output_path)
    except (FileExistsError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(resolved_output))


@cli.command(name="generate")
@click.option(
    "--config",
    "config_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to the YAML runner configuration",
)
@click.option(
    "--state-file",
    "state_file",
    required=False,
    type=click.Path(path_type=str),
    help="Override build.state_file from the configuration",
)
@click.option(
    "--full",
    "full_build",
    is_flag=True,
    default=False,
    help="Ignore recorded fingerprints and regenerate every source root.",
)
def generate(config_path: str, state_file: str | None, full_build: bool) -> None:
    """Regenerate sources that changed since the previous run."""
    try:
        result = execute_generate_goal(
            RunRequest(config_path=config_path, state_file=state_file, full_build=full_build)
        )
    except (RunExecutionError, OSError) as exc:
        raise CliError(str(exc)) from exc
    _finish(result, verb="changed")


@cli.command(name="validate")
@click.option(
    "--config",
    "config_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to the YAML runner configuration",
)
@click.option(
    "--stop-on-error/--no-stop-on-error",
    "stop_on_error",
    default=None,
    help="Fail when sources need regeneration (defaults to validation.stop_on_error).",
)
def validate(config_path: str, stop_on_error: bool | None) -> None:
    """Check that no source needs regeneration, without writing anything."""
    try:
        result = execute_validate_goal(
            RunRequest(config_path=config_path, stop_on_error=stop_on_error)
        )
    except (RunExecutionError, OSError) as exc:
        raise CliError(str(exc)) from exc
    _finish(result, verb="out of date")


def _finish(result: RunResult, *, verb: str) -> None:
    for diagnostic in result.diagnostics:
        click.echo(
            f"{diagnostic.file}:{diagnostic.reported_line}: {diagnostic.message}",
            err=True,
        )
    if not result.succeeded:
        lines = [result.message or result.status.value]
        lines.extend(f"  {path}" for path in result.changed_files)
        raise CliError("\n".join(lines))
    click.echo(f"{result.changed_count} files {verb}")


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for console_scripts wiring."""
    argv = argv if argv is not None else sys.argv[1:]
    try:
        cli.main(args=list(argv), standalone_mode=False)
    except CliError as exc:
        click.echo(str(exc), err=True)
        return 1
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.Abort:
        click.echo("Aborted.", err=True)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
