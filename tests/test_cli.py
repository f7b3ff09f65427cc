"""Tests for the root mapnikstyle CLI."""

from pathlib import Path

import pytest
from click.testing import CliRunner

from mapnikstyle import __version__
from mapnikstyle.cli import cli


def test_cli_help(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--help"])
    assert result.exit_code == 0
    assert "mapnikstyle" in result.output
    for command in ("write", "read", "filter"):
        assert command in result.output


def test_cli_version(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_cli_no_args(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, [])
    assert result.exit_code == 0
    assert "Usage" in result.output


# --- Global flags ---


def test_json_flag_accepted(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--json", "--version"])
    assert result.exit_code == 0


def test_quiet_flag_accepted(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["-q", "--version"])
    assert result.exit_code == 0


def test_verbose_flag_accepted(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["-v", "--version"])
    assert result.exit_code == 0


def test_config_option_accepted(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["-c", "/tmp/test.toml", "--version"])
    assert result.exit_code == 0


def test_quiet_and_verbose_conflict(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["-q", "-v", "filter", "parse", "[a] = 1"])
    assert result.exit_code == 2
    assert "--quiet and --verbose cannot be combined" in result.output


def test_config_option_rejects_directory(cli_runner: CliRunner, tmp_path: Path) -> None:
    result = cli_runner.invoke(cli, ["-c", str(tmp_path), "filter", "parse", "[a] = 1"])
    assert result.exit_code == 2


def test_config_from_pyproject(
    cli_runner: CliRunner, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.delenv("MAPNIKSTYLE_CONFIG", raising=False)
    (tmp_path / "pyproject.toml").write_text("[tool.mapnikstyle.output]\ninclude_map = false\n")
    style = tmp_path / "s.json"
    style.write_text('{"name": "s", "rules": [{"name": "r"}]}')
    monkeypatch.chdir(tmp_path)
    result = cli_runner.invoke(cli, ["write", str(style)])
    assert result.exit_code == 0
    assert "<Map" not in result.output
    assert '<Style name="s"' in result.output
