"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, mapnikstyle.toml only contains
overrides. An empty file (or none at all) writes a ``<Map>``-wrapped style
with no extra attributes.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from mapnikstyle.domain.types import SYMBOLIZER_ELEMENTS

# Configured attribute values: anything the markup codec can stringify.
OptionValue = str | int | float | bool


class OutputOptions(BaseModel):
    """[output] section: how written markup is wrapped and decorated.

    Attributes:
        include_map: Wrap the ``<Style>`` in a ``<Map>`` container.
        glyph_base_path: Directory joined onto well-known glyph files.
        map: Extra attributes for ``<Map>`` (e.g. ``srs``).
        style: Extra attributes for ``<Style>``.
        symbolizers: Extra attributes per symbolizer element name
            (e.g. ``{"TextSymbolizer": {"placement": "line"}}``).

    Computed attributes always win over configured ones on key collision.
    """

    model_config = {"frozen": True, "populate_by_name": True}

    include_map: bool = Field(default=True, alias="includeMapContainer")
    glyph_base_path: str | None = Field(default=None, alias="glyphBasePath")
    map: dict[str, OptionValue] = Field(default_factory=dict, alias="mapOptions")
    style: dict[str, OptionValue] = Field(default_factory=dict, alias="styleOptions")
    symbolizers: dict[str, dict[str, OptionValue]] = Field(
        default_factory=dict, alias="symbolizerOptions"
    )

    @field_validator("symbolizers")
    @classmethod
    def _known_elements(
        cls, value: dict[str, dict[str, OptionValue]]
    ) -> dict[str, dict[str, OptionValue]]:
        unknown = sorted(set(value) - SYMBOLIZER_ELEMENTS)
        if unknown:
            allowed = ", ".join(sorted(SYMBOLIZER_ELEMENTS))
            raise ValueError(f"Unknown symbolizer element(s) {unknown}; expected one of: {allowed}")
        return value


class StyleConfig(BaseModel):
    """Root configuration composing all sections."""

    model_config = {"frozen": True}

    output: OutputOptions = Field(default_factory=OutputOptions)
