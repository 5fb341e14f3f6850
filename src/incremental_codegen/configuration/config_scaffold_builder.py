"""Configuration scaffold generation helpers."""

from __future__ import annotations

from pathlib import Path

DEFAULT_CONFIG_FILENAME = "codegen.yaml"

_CONFIG_SCAFFOLD_TEMPLATE = """# Runner configuration template for incremental-codegen.
# Replace every <REQUIRED> placeholder before running generate or validate.
# Remove or fill <OPTIONAL> entries; relative paths resolve against this file.

tool:
  # Generator class as "package.module:ClassName".
  entry_point: "<REQUIRED>"
  # Directories added to the import path while loading the generator.
  # paths:
  #   - "<OPTIONAL>"

sources:
  source_dir: "<REQUIRED>"
  # test_source_dir: "<OPTIONAL>"
  # Compiled-output directories, only used by build.purge_compiled_artifacts.
  # classes_dir: "<OPTIONAL>"
  # test_classes_dir: "<OPTIONAL>"
  include: "**/*.java"
  compiled_suffix: ".class"

generator:
  # indent: "<OPTIONAL>"
  # prefix: "<OPTIONAL>"
  # config: "<OPTIONAL>"
  # verbose: "<OPTIONAL>"

validation:
  # Fail validate when files need regeneration; false only logs a warning.
  stop_on_error: true

build:
  skip: false
  state_file: ".codegen-state.yaml"
  # Deletes compiled artifacts of regenerated sources. Leave off unless your IDE needs it.
  purge_compiled_artifacts: false
  # Record generator errors as problem markers instead of failing the run.
  problems_inline: false
"""


def build_placeholder_configuration() -> str:
    """Build a YAML runner configuration template with placeholders and inline guidance."""
    return _CONFIG_SCAFFOLD_TEMPLATE


def write_placeholder_configuration(output_path: Path | str) -> Path:
    """Write the placeholder runner configuration to the requested output path.

    Args:
      output_path: Destination file path for the scaffold.

    Returns:
      The resolved destination path.

    Raises:
      FileExistsError: If the destination file already exists.
      OSError: If writing the scaffold fails.
    """
    destination = Path(output_path)
    if destination.exists():
        raise FileExistsError(f"Runner configuration file already exists: {destination.resolve()}")
    destination.write_text(build_placeholder_configuration(), encoding="utf-8")
    return destination.resolve()
