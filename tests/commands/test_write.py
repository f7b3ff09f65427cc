"""Tests for the write command."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from mapnikstyle.cli import cli


def _document(tmp_path: Path, document: dict) -> Path:
    path = tmp_path / "style.json"
    path.write_text(json.dumps(document), encoding="utf-8")
    return path


@pytest.mark.usefixtures("_isolated_cwd")
class TestWriteCommand:
    def test_markup_to_stdout(self, cli_runner: CliRunner, roads_file: Path) -> None:
        result = cli_runner.invoke(cli, ["write", str(roads_file)])
        assert result.exit_code == 0, result.output
        assert result.output.startswith('<?xml version="1.0" encoding="utf-8"?>\n<Map>')
        assert '<Rule name="highways">' in result.output

    def test_output_file(self, cli_runner: CliRunner, roads_file: Path, tmp_path: Path) -> None:
        target = tmp_path / "roads.xml"
        result = cli_runner.invoke(cli, ["write", str(roads_file), "--output", str(target)])
        assert result.exit_code == 0, result.output
        assert "OK  write_style" in result.output
        assert "rules: 3" in result.output
        assert target.read_text(encoding="utf-8").startswith("<?xml")

    def test_flags(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        path = _document(
            tmp_path,
            {"name": "pois", "rules": [{"symbolizers": [{"kind": "Mark", "wellKnownName": "X"}]}]},
        )
        result = cli_runner.invoke(
            cli,
            [
                "write",
                str(path),
                "--no-map",
                "--glyph-base-path",
                "/sym",
                "--style-option",
                "opacity=0.5",
            ],
        )
        assert result.exit_code == 0, result.output
        assert "<Map" not in result.output
        assert '<Style name="pois" opacity="0.5">' in result.output
        assert 'file="/sym/x.svg"' in result.output

    def test_map_option(self, cli_runner: CliRunner, roads_file: Path) -> None:
        result = cli_runner.invoke(
            cli, ["write", str(roads_file), "--map-option", "srs=+init=epsg:3857"]
        )
        assert result.exit_code == 0, result.output
        assert '<Map srs="+init=epsg:3857">' in result.output

    def test_bad_pair(self, cli_runner: CliRunner, roads_file: Path) -> None:
        result = cli_runner.invoke(cli, ["write", str(roads_file), "--map-option", "srs"])
        assert result.exit_code == 2
        assert "expected key=value" in result.output

    def test_config_file_applies(
        self, cli_runner: CliRunner, roads_file: Path, tmp_path: Path
    ) -> None:
        (tmp_path / "mapnikstyle.toml").write_text("[output]\ninclude_map = false\n")
        result = cli_runner.invoke(cli, ["write", str(roads_file)])
        assert result.exit_code == 0, result.output
        assert "<Map" not in result.output

    def test_failure_exits_1(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        path = _document(
            tmp_path,
            {"rules": [{"name": "bad", "symbolizers": [{"kind": "Mark", "wellKnownName": "?"}]}]},
        )
        result = cli_runner.invoke(cli, ["write", str(path)])
        assert result.exit_code == 1
        assert "ERROR  write_style" in result.output
        assert "rule_name: bad" in result.output

    def test_skip_invalid_warns(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        path = _document(
            tmp_path,
            {
                "rules": [
                    {"name": "bad", "filter": ["~", "a", "b"]},
                    {"name": "good", "symbolizers": [{"kind": "Raster"}]},
                ]
            },
        )
        result = cli_runner.invoke(cli, ["write", str(path), "--skip-invalid"])
        assert result.exit_code == 0, result.output
        assert '<Rule name="good">' in result.output
        assert "WARNING: Skipped rule bad" in result.output

    def test_json_output(self, cli_runner: CliRunner, roads_file: Path) -> None:
        result = cli_runner.invoke(cli, ["--json", "write", str(roads_file)])
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["ok"] is True
        assert data["data"]["markup"].startswith("<?xml")

    def test_missing_input(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        result = cli_runner.invoke(cli, ["write", str(tmp_path / "nope.json")])
        assert result.exit_code == 2
