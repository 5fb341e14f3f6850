"""Tests for generator capability probing and result normalization."""

from __future__ import annotations

from pathlib import Path

import pytest
from incremental_codegen.tool_invocation import (
    CountingToolAdapter,
    CountOnly,
    FileList,
    GenerationConfigError,
    GenerationRequest,
    GenerationToolError,
    ListingToolAdapter,
    bind_tool,
)

_REQUEST = GenerationRequest(args=("-R", "/work/src"))


class _CountingGenerator:
    received: list[list[str]] = []

    def __init__(self, args: list[str]) -> None:
        self.args = args

    @classmethod
    def create_from_args(cls, args: list[str]) -> _CountingGenerator:
        cls.received.append(args)
        return cls(args)

    def process(self) -> int:
        return 3


class _ListingGenerator(_CountingGenerator):
    def process_files(self) -> list[object]:
        return ["/work/src/A.java", Path("/work/src/B.java"), None]


class _RejectingGenerator:
    @classmethod
    def create_from_args(cls, args: list[str]) -> _RejectingGenerator:
        raise ValueError(f"Unknown flag: {args[0]}")

    def process(self) -> int:  # pragma: no cover - never constructed
        return 0


class _FailingGenerator:
    @classmethod
    def create_from_args(cls, args: list[str]) -> _FailingGenerator:
        return cls()

    def process(self) -> int:
        try:
            try:
                raise OSError("disk full")
            except OSError as inner:
                raise ValueError("cannot write Bean.java") from inner
        except ValueError as middle:
            raise RuntimeError("Error in bean: /work/src/Bean.java") from middle


def test_listing_capability_is_preferred_over_counting() -> None:
    assert isinstance(bind_tool(_ListingGenerator), ListingToolAdapter)
    assert isinstance(bind_tool(_CountingGenerator), CountingToolAdapter)


def test_generator_without_factory_is_rejected() -> None:
    class _NoFactory:
        def process(self) -> int:
            return 0

    with pytest.raises(GenerationConfigError, match="create_from_args"):
        bind_tool(_NoFactory)


def test_generator_without_process_methods_is_rejected() -> None:
    class _NoProcess:
        @classmethod
        def create_from_args(cls, args: list[str]) -> _NoProcess:
            return cls()

    with pytest.raises(GenerationConfigError, match=r"process_files\(\) or _NoProcess.process"):
        bind_tool(_NoProcess)


def test_counting_adapter_passes_arguments_and_returns_count() -> None:
    _CountingGenerator.received.clear()

    outcome = bind_tool(_CountingGenerator).generate(_REQUEST)

    assert outcome == CountOnly(count=3)
    assert outcome.changed_count == 3
    assert _CountingGenerator.received == [["-R", "/work/src"]]


def test_listing_adapter_normalizes_paths_and_keeps_directory_sentinel() -> None:
    outcome = bind_tool(_ListingGenerator).generate(_REQUEST)

    assert outcome == FileList(files=(Path("/work/src/A.java"), Path("/work/src/B.java"), None))
    assert outcome.changed_count == 3


def test_factory_failure_is_a_configuration_error() -> None:
    with pytest.raises(GenerationConfigError, match="configuration: Unknown flag: -R"):
        bind_tool(_RejectingGenerator).generate(_REQUEST)


def test_generation_failure_keeps_two_levels_of_causes() -> None:
    with pytest.raises(GenerationToolError) as excinfo:
        bind_tool(_FailingGenerator).generate(_REQUEST)

    assert excinfo.value.message == "Error in bean: /work/src/Bean.java"
    assert excinfo.value.causes == ("cannot write Bean.java", "disk full")


def test_invalid_count_is_a_tool_error() -> None:
    class _NegativeGenerator(_CountingGenerator):
        def process(self) -> int:
            return -1

    with pytest.raises(GenerationToolError, match="invalid change count"):
        bind_tool(_NegativeGenerator).generate(_REQUEST)


def test_tool_error_keeps_at_most_two_causes() -> None:
    error = GenerationToolError("top", ("one", "two", "three"))

    assert error.causes == ("one", "two")
    assert str(error) == "top"


def test_factory_exit_is_a_configuration_error() -> None:
    class _ArgparseGenerator(_CountingGenerator):
        @classmethod
        def create_from_args(cls, args: list[str]) -> _ArgparseGenerator:
            raise SystemExit(2)

    with pytest.raises(GenerationConfigError, match="exited with status 2"):
        bind_tool(_ArgparseGenerator).generate(_REQUEST)


def test_generation_exit_is_a_tool_error() -> None:
    class _ExitingGenerator(_ListingGenerator):
        def process_files(self) -> list[object]:
            raise SystemExit("cannot continue")

    with pytest.raises(GenerationToolError) as excinfo:
        bind_tool(_ExitingGenerator).generate(_REQUEST)

    assert excinfo.value.message == "cannot continue"
