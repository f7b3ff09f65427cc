"""Rich Console factory and theme for mapnikstyle output.

Creates Console instances that render to a StringIO buffer, preserving
the ``format_result() -> str`` contract. In non-TTY environments
(tests, pipes) Rich automatically disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

STYLE_THEME = Theme(
    {
        "ms.ok": "bold green",
        "ms.error": "bold red",
        "ms.warning": "bold yellow",
        "ms.op": "bold cyan",
        "ms.key": "dim",
        "ms.name": "bold",
        "ms.path": "dim",
        "ms.expression": "magenta",
        "ms.kind.fill": "green",
        "ms.kind.line": "blue",
        "ms.kind.mark": "yellow",
        "ms.kind.icon": "yellow",
        "ms.kind.text": "cyan",
        "ms.kind.raster": "magenta",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes (used in tests).
        width: Override terminal width (useful for consistent test output).
    """
    return Console(
        file=StringIO(),
        theme=STYLE_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_kind(kind: str) -> str:
    """Return the Rich style name for a symbolizer kind."""
    return f"ms.kind.{kind.lower()}" if kind else ""
