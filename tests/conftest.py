"""Shared pytest fixtures and test helpers for mapnikstyle tests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from mapnikstyle.domain.style import Style


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def _isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run in an empty temp directory with no config discovery overrides.

    Use via ``@pytest.mark.usefixtures("_isolated_cwd")`` on command test
    classes.
    """
    monkeypatch.delenv("MAPNIKSTYLE_CONFIG", raising=False)
    monkeypatch.chdir(tmp_path)


# ---------------------------------------------------------------------------
# Sample styles
# ---------------------------------------------------------------------------


ROADS_DOCUMENT: dict[str, Any] = {
    "name": "roads",
    "rules": [
        {
            "name": "highways",
            "filter": ["==", "highway", "motorway"],
            "scaleDenominator": {"min": 0, "max": 500000},
            "symbolizers": [
                {"kind": "Line", "color": "#303030", "width": 5, "cap": "round"},
                {"kind": "Line", "color": "#f0a030", "width": 3, "cap": "round"},
            ],
        },
        {
            "name": "labels",
            "filter": [
                "&&",
                ["==", "highway", "primary"],
                ["!", ["==", "name", None]],
            ],
            "symbolizers": [
                {"kind": "Text", "label": "name", "size": 12, "font": ["DejaVu Sans Book"]},
            ],
        },
        {
            "name": "parks",
            "symbolizers": [
                {"kind": "Fill", "color": "#c8facc", "opacity": 0.8},
            ],
        },
    ],
}


def make_style(document: dict[str, Any] | None = None) -> Style:
    """Validate a neutral document (default: the roads sample) into a Style."""
    return Style.model_validate(document if document is not None else ROADS_DOCUMENT)


@pytest.fixture
def roads_style() -> Style:
    return make_style()


@pytest.fixture
def roads_file(tmp_path: Path) -> Path:
    """The roads sample written as a JSON document."""
    path = tmp_path / "roads.json"
    path.write_text(json.dumps(ROADS_DOCUMENT), encoding="utf-8")
    return path
