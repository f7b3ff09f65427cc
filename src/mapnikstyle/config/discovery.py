"""Config file discovery and reading.

Settings live either in a dedicated ``mapnikstyle.toml`` or in the
``[tool.mapnikstyle]`` table of a project's ``pyproject.toml``. The finder
walks up from the working directory (like git looking for ``.git/``) and
stops at the first directory holding either; the dedicated file wins when a
directory has both. ``MAPNIKSTYLE_CONFIG`` names a file and skips the walk.
"""

from __future__ import annotations

import logging
import os
import tomllib
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "mapnikstyle.toml"
PYPROJECT_FILENAME = "pyproject.toml"
TOOL_TABLE = "mapnikstyle"
CONFIG_ENV_VAR = "MAPNIKSTYLE_CONFIG"


def _tool_table(data: dict[str, Any]) -> dict[str, Any] | None:
    tool = data.get("tool")
    if not isinstance(tool, dict):
        return None
    table = tool.get(TOOL_TABLE)
    return table if isinstance(table, dict) else None


def _pyproject_has_table(path: Path) -> bool:
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError:
        logger.debug("Ignoring unparsable %s during config discovery", path)
        return False
    return _tool_table(data) is not None


def find_config(start: Path | None = None) -> Path | None:
    """Walk up from *start* (default: cwd) looking for mapnikstyle settings.

    Returns the ``mapnikstyle.toml`` or ``pyproject.toml`` that holds them,
    or None. ``MAPNIKSTYLE_CONFIG`` is checked first; if it names a missing
    file the result is None.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        p = Path(env_path)
        if p.is_file():
            return p
        return None

    current = (start or Path.cwd()).resolve()
    while True:
        candidate = current / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
        pyproject = current / PYPROJECT_FILENAME
        if pyproject.is_file() and _pyproject_has_table(pyproject):
            return pyproject
        parent = current.parent
        if parent == current:
            break
        current = parent
    return None


def read_config_data(path: Path) -> dict[str, Any]:
    """Return the raw settings mapping stored in *path*.

    A ``pyproject.toml`` contributes only its ``[tool.mapnikstyle]`` table
    (empty when absent); any other file is the mapping itself.

    Raises:
        tomllib.TOMLDecodeError: *path* is not valid TOML.
    """
    data = tomllib.loads(path.read_text(encoding="utf-8"))
    if path.name == PYPROJECT_FILENAME:
        return _tool_table(data) or {}
    return data
