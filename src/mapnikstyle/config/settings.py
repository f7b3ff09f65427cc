"""Unified settings: CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs: CLI flags passed by Click
  2. Env vars: ``MAPNIKSTYLE_*`` prefix, ``__`` for nesting
  3. TOML file: ``mapnikstyle.toml`` or ``pyproject.toml``
     ``[tool.mapnikstyle]`` discovered via walk-up
  4. Code defaults baked into the section models

Uses Pydantic Settings v2 with a custom :class:`TomlSettingsSource` that
reuses the ``find_config`` walk-up discovery from
:mod:`mapnikstyle.config.discovery`.
"""

from __future__ import annotations

import threading
import tomllib
from pathlib import Path
from typing import Any

import click
from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from mapnikstyle.config.discovery import find_config, read_config_data
from mapnikstyle.config.models import OutputOptions, StyleConfig


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from the discovered ``mapnikstyle.toml`` or ``[tool.mapnikstyle]`` table.

    The file's contents are validated against :class:`StyleConfig` up front so
    a bad value is reported against the file that holds it.
    """

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            try:
                self._data = read_config_data(toml_path)
            except tomllib.TOMLDecodeError as exc:
                msg = f"Invalid TOML in {toml_path}: {exc}"
                raise click.ClickException(msg) from exc
            try:
                StyleConfig.model_validate(self._data)
            except ValidationError as exc:
                msg = f"Invalid configuration in {toml_path}: {exc}"
                raise click.ClickException(msg) from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        """Return the full TOML data dict for Pydantic to merge."""
        return self._data


# Thread-local storage for TOML path during construction.
_tls = threading.local()


class StyleSettings(BaseSettings):
    """Unified settings for the mapnikstyle CLI.

    Stored in ``click.Context.obj`` (via ``AppContext``) at the CLI root.

    Attributes:
        config_path: The TOML file that was loaded, or None.
        output: Write-side options handed to the translation service.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "MAPNIKSTYLE_",
        "env_nested_delimiter": "__",
    }

    config_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    # --- TOML sections ---
    output: OutputOptions = Field(default_factory=OutputOptions)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert TOML source between env vars and defaults."""
        toml_path = getattr(_tls, "toml_path", None)
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, toml_path),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        cwd: Path | None = None,
        **cli_flags: Any,
    ) -> StyleSettings:
        """Construct settings from CLI invocation.

        Discovers ``mapnikstyle.toml`` via walk-up from *cwd* (or uses an
        explicit *config_path*) and merges CLI flags as highest-priority
        overrides.
        """
        toml_path: Path | None = None
        if config_path:
            p = Path(config_path)
            if p.is_file():
                toml_path = p
        else:
            toml_path = find_config(cwd)

        _tls.toml_path = toml_path
        try:
            return cls(config_path=toml_path, **cli_flags)
        finally:
            _tls.toml_path = None

    def with_output(self, **overrides: Any) -> OutputOptions:
        """Return :attr:`output` with per-command overrides applied.

        ``None`` overrides are ignored; dict overrides are merged over the
        configured mapping rather than replacing it.
        """
        update: dict[str, Any] = {}
        for key, value in overrides.items():
            if value is None:
                continue
            current = getattr(self.output, key)
            if isinstance(current, dict) and isinstance(value, dict):
                value = {**current, **value}
            update[key] = value
        return self.output.model_copy(update=update)
