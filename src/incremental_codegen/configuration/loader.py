"""Configuration loader service."""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import yaml

from .runtime_settings import (
    BuildSettings,
    Configuration,
    GeneratorOptions,
    SourceSettings,
    ToolSettings,
    ValidationSettings,
)

DEFAULT_INCLUDE = "**/*.java"
DEFAULT_COMPILED_SUFFIX = ".class"
DEFAULT_STATE_FILENAME = ".codegen-state.yaml"

_ENTRY_POINT_PATTERN = re.compile(r"^[A-Za-z_][\w.]*:[A-Za-z_]\w*$")


class ConfigurationError(Exception):
    """Raised when the configuration file is invalid."""


def load_configuration(config_path: Path | str) -> Configuration:
    """Load and validate the configuration file."""
    path = Path(config_path)
    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}")

    text = path.read_text(encoding="utf-8")
    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Failed to parse configuration file: {exc}") from exc

    if parsed is None:
        parsed = {}

    if not isinstance(parsed, Mapping):
        raise ConfigurationError("Configuration root must be a mapping.")

    base_path = path.resolve().parent
    return Configuration(
        path=path,
        tool=_parse_tool_section(parsed.get("tool"), base_path),
        sources=_parse_sources_section(parsed.get("sources"), base_path),
        generator=_parse_generator_section(parsed.get("generator")),
        validation=_parse_validation_section(parsed.get("validation")),
        build=_parse_build_section(parsed.get("build"), base_path),
    )


def _parse_tool_section(value: Any, base_path: Path) -> ToolSettings:
    section = _require_mapping(value, "tool")
    entry_point = _require_non_empty_string(section.get("entry_point"), "tool.entry_point")
    if not _ENTRY_POINT_PATTERN.match(entry_point):
        raise ConfigurationError(
            f"tool.entry_point '{entry_point}' must look like 'package.module:ClassName'."
        )
    raw_paths = _normalize_string_sequence(section.get("paths"), "tool.paths")
    return ToolSettings(
        entry_point=entry_point,
        paths=tuple(_resolve_path(base_path, raw) for raw in raw_paths),
    )


def _parse_sources_section(value: Any, base_path: Path) -> SourceSettings:
    section = _require_mapping(value, "sources")
    source_dir = _require_non_empty_string(section.get("source_dir"), "sources.source_dir")
    include = _require_non_empty_string(
        section.get("include", DEFAULT_INCLUDE), "sources.include"
    )
    compiled_suffix = _require_non_empty_string(
        section.get("compiled_suffix", DEFAULT_COMPILED_SUFFIX), "sources.compiled_suffix"
    )
    if not compiled_suffix.startswith("."):
        raise ConfigurationError("sources.compiled_suffix must start with '.'.")
    return SourceSettings(
        source_dir=_resolve_path(base_path, source_dir),
        test_source_dir=_optional_path(
            section.get("test_source_dir"), "sources.test_source_dir", base_path
        ),
        classes_dir=_optional_path(section.get("classes_dir"), "sources.classes_dir", base_path),
        test_classes_dir=_optional_path(
            section.get("test_classes_dir"), "sources.test_classes_dir", base_path
        ),
        include=include,
        compiled_suffix=compiled_suffix,
    )


def _parse_generator_section(value: Any) -> GeneratorOptions:
    section = _optional_mapping(value, "generator")
    verbose = section.get("verbose")
    if verbose is not None:
        verbose = _require_non_negative_int(verbose, "generator.verbose")
    return GeneratorOptions(
        indent=_optional_scalar_string(section.get("indent"), "generator.indent"),
        prefix=_optional_scalar_string(section.get("prefix"), "generator.prefix"),
        config=_optional_scalar_string(section.get("config"), "generator.config"),
        verbose=verbose,
    )


def _parse_validation_section(value: Any) -> ValidationSettings:
    section = _optional_mapping(value, "validation")
    return ValidationSettings(
        stop_on_error=_require_bool(
            section.get("stop_on_error", True), "validation.stop_on_error"
        ),
    )


def _parse_build_section(value: Any, base_path: Path) -> BuildSettings:
    section = _optional_mapping(value, "build")
    state_file = _require_non_empty_string(
        section.get("state_file", DEFAULT_STATE_FILENAME), "build.state_file"
    )
    return BuildSettings(
        skip=_require_bool(section.get("skip", False), "build.skip"),
        state_file=_resolve_path(base_path, state_file),
        purge_compiled_artifacts=_require_bool(
            section.get("purge_compiled_artifacts", False), "build.purge_compiled_artifacts"
        ),
        problems_inline=_require_bool(
            section.get("problems_inline", False), "build.problems_inline"
        ),
    )


def _normalize_string_sequence(value: Any, field_name: str) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        stripped = value.strip()
        return (stripped,) if stripped else ()
    if isinstance(value, Sequence):
        normalized = []
        for item in value:
            if not isinstance(item, str):
                raise ConfigurationError(f"{field_name} entries must be strings.")
            stripped = item.strip()
            if stripped:
                normalized.append(stripped)
        return tuple(normalized)
    raise ConfigurationError(f"{field_name} must be a string or list of strings.")


def _resolve_path(base_path: Path, raw_path: str) -> Path:
    candidate = Path(raw_path)
    if not candidate.is_absolute():
        return (base_path / candidate).resolve()
    return candidate


def _optional_path(value: Any, field_name: str, base_path: Path) -> Path | None:
    raw = _optional_string(value, field_name)
    if raw is None:
        return None
    return _resolve_path(base_path, raw)


def _require_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Configuration section '{section_name}' is required.")
    return value


def _optional_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Configuration section '{section_name}' must be a mapping.")
    return value


def _require_non_empty_string(value: Any, field_name: str) -> str:
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    if not stripped:
        raise ConfigurationError(f"{field_name} must not be empty.")
    return stripped


def _optional_string(value: Any, field_name: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    return stripped or None


def _optional_scalar_string(value: Any, field_name: str) -> str | None:
    # YAML turns `indent: 4` into an int; the generator only ever sees text.
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    return _optional_string(value, field_name)


def _require_bool(value: Any, field_name: str) -> bool:
    if not isinstance(value, bool):
        raise ConfigurationError(f"{field_name} must be true or false.")
    return value


def _require_non_negative_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if value < 0:
        raise ConfigurationError(f"{field_name} must not be negative.")
    return value
