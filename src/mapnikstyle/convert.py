"""One-call conversions between neutral styles and Mapnik XML text.

These compose the translation core with the markup codec and fail fast:
any :class:`~mapnikstyle.domain.errors.StyleTranslationError` propagates.
"""

from __future__ import annotations

from mapnikstyle.config.models import OutputOptions
from mapnikstyle.domain.style import Style
from mapnikstyle.infrastructure.markup import parse, serialize
from mapnikstyle.translation.styles import node_to_style, style_to_node


def write_style(style: Style, options: OutputOptions | None = None) -> str:
    """Translate *style* into a Mapnik XML document."""
    return serialize(style_to_node(style, options))


def read_style(markup: str | bytes) -> Style:
    """Translate a Mapnik XML document into a neutral style."""
    return node_to_style(parse(markup))
