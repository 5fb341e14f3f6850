"""CLI orchestration integration tests."""

from __future__ import annotations

import textwrap
import uuid
from pathlib import Path

import yaml
from click.testing import CliRunner
from incremental_codegen.cli import cli, main

_GENERATOR_SOURCE = textwrap.dedent(
    """
    import pathlib


    class CountingGen:
        def __init__(self, target, write):
            self.target = target
            self.write = write

        @classmethod
        def create_from_args(cls, args):
            if "-prefix=bad" in args:
                raise ValueError("Invalid prefix: bad")
            return cls(pathlib.Path(args[-1]), "-nowrite" not in args)

        def process(self):
            if self.target.is_file():
                files = [self.target]
            else:
                files = sorted(self.target.rglob("*.java"))
            count = 0
            for path in files:
                text = path.read_text(encoding="utf-8")
                if "crash" in text:
                    raise RuntimeError("generator crashed")
                if not text.startswith("// generated"):
                    if self.write:
                        path.write_text("// generated\\n" + text, encoding="utf-8")
                    count += 1
            return count
    """
)


def _write_project(tmp_path: Path, **generator: str) -> Path:
    module_name = f"countinggen_{uuid.uuid4().hex}"
    (tmp_path / "tools").mkdir()
    (tmp_path / "tools" / f"{module_name}.py").write_text(_GENERATOR_SOURCE, encoding="utf-8")
    source_dir = tmp_path / "src"
    source_dir.mkdir()
    (source_dir / "Bean.java").write_text("class Bean {}\n", encoding="utf-8")
    (source_dir / "Other.java").write_text("class Other {}\n", encoding="utf-8")
    config = {
        "tool": {"entry_point": f"{module_name}:CountingGen", "paths": ["tools"]},
        "sources": {"source_dir": "src"},
        "generator": dict(generator),
    }
    config_path = tmp_path / "codegen.yaml"
    config_path.write_text(yaml.safe_dump(config), encoding="utf-8")
    return config_path


def test_generate_config_command_writes_scaffold(tmp_path: Path) -> None:
    runner = CliRunner()
    output_path = tmp_path / "codegen.yaml"

    result = runner.invoke(cli, ["generate-config", "--output", str(output_path)])

    assert result.exit_code == 0
    assert output_path.exists()
    assert str(output_path.resolve()) in result.output


def test_generate_command_reports_changed_count_then_nothing(tmp_path: Path) -> None:
    runner = CliRunner()
    config_path = _write_project(tmp_path)

    first = runner.invoke(cli, ["generate", "--config", str(config_path)])
    second = runner.invoke(cli, ["generate", "--config", str(config_path)])

    assert first.exit_code == 0
    assert "2 files changed" in first.output
    assert second.exit_code == 0
    assert "0 files changed" in second.output
    assert (tmp_path / "src" / "Bean.java").read_text(encoding="utf-8").startswith("// generated")


def test_generate_command_honours_state_file_override(tmp_path: Path) -> None:
    runner = CliRunner()
    config_path = _write_project(tmp_path)
    state_file = tmp_path / "custom" / "state.yaml"

    result = runner.invoke(
        cli, ["generate", "--config", str(config_path), "--state-file", str(state_file)]
    )

    assert result.exit_code == 0
    assert state_file.exists()
    assert not (tmp_path / ".codegen-state.yaml").exists()


def test_generate_command_fails_on_rejected_arguments(tmp_path: Path, capsys) -> None:
    config_path = _write_project(tmp_path, prefix="bad")

    exit_code = main(["generate", "--config", str(config_path)])
    captured = capsys.readouterr()

    assert exit_code == 1
    assert "Invalid generator configuration: Invalid prefix: bad" in captured.err


def test_generate_command_prints_diagnostic_on_tool_error(tmp_path: Path, capsys) -> None:
    config_path = _write_project(tmp_path)
    (tmp_path / "src" / "Other.java").write_text("class Other { crash }\n", encoding="utf-8")

    exit_code = main(["generate", "--config", str(config_path)])
    captured = capsys.readouterr()

    assert exit_code == 1
    assert f"{(tmp_path / 'src').resolve()}:2: generator crashed" in captured.err
    assert "Error while running generator: generator crashed" in captured.err


def test_validate_command_fails_then_tolerates_drift(tmp_path: Path, capsys) -> None:
    config_path = _write_project(tmp_path)

    failing = main(["validate", "--config", str(config_path)])
    failing_output = capsys.readouterr()
    tolerant = main(["validate", "--config", str(config_path), "--no-stop-on-error"])
    tolerant_output = capsys.readouterr()

    assert failing == 1
    assert "Some sources need to be re-generated (2 files)" in failing_output.err
    assert tolerant == 0
    assert "2 files out of date" in tolerant_output.out
