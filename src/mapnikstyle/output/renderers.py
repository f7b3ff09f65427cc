"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO). The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json as _json
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from mapnikstyle.output.console import create_console, get_output, style_for_kind

if TYPE_CHECKING:
    from rich.console import Console

    from mapnikstyle.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op}: {msg}"
    if "expression" in result.data:
        return str(result.data["expression"])
    if "filter" in result.data:
        return _json.dumps(result.data["filter"])
    if result.skipped:
        return f"OK: {result.op} (skipped {result.skipped})"
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    """Print the OK status line."""
    console.print(Text.assemble(("OK", "ms.ok"), (f"  {result.op}", "ms.op")))


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="ms.key")
    if key == "name":
        v = Text(str(value), style="ms.name")
    elif key in ("output_file", "path"):
        v = Text(str(value), style="ms.path")
    elif key == "expression":
        v = Text(str(value), style="ms.expression")
    else:
        v = Text(str(value))
    console.print(Text.assemble(k, v))


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Print the meta block (verbose only)."""
    if not result.meta:
        return
    console.print()
    console.print(Text("  meta:", style="dim"))
    for k, v in result.meta.items():
        console.print(Text(f"    {k}: {v}"))


def _rule_table(rules: list[dict[str, Any]]) -> Table:
    """Build a Rich Table summarizing neutral rules."""
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Name", style="ms.name")
    table.add_column("Filter", style="ms.expression")
    table.add_column("Scale")
    table.add_column("Symbolizers")

    for index, rule in enumerate(rules):
        scale = rule.get("scaleDenominator") or {}
        bounds = ""
        if scale:
            bounds = f"{scale.get('min', '')}..{scale.get('max', '')}"
        kinds = Text()
        for position, symbolizer in enumerate(rule.get("symbolizers", [])):
            kind = str(symbolizer.get("kind", ""))
            if position:
                kinds.append(", ")
            kinds.append(kind, style=style_for_kind(kind))
        table.add_row(
            str(index),
            Text(str(rule.get("name", ""))),
            Text(_json.dumps(rule["filter"], separators=(",", ":")) if "filter" in rule else ""),
            bounds,
            kinds,
        )
    return table


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    console.print(Text.assemble(("ERROR", "ms.error"), (f"  {result.op}", "ms.op"), f": {msg}"))

    if err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(Text(f"    {k}: {v}"))
    if verbose and err:
        console.print(Text(f"    code: {err.code}"))


# ── Operation renderers ───────────────────────────────────────────────


def _render_write(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render write_style results (markup itself is not echoed)."""
    _status_line(console, result)
    for key in ("name", "rules", "output_file"):
        if key in result.data:
            _field(console, key, result.data[key])
    if verbose:
        _render_meta(console, result)


def _render_read(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render read_style results as a rule summary table."""
    _status_line(console, result)
    for key in ("name", "rules", "output_file"):
        if key in result.data:
            _field(console, key, result.data[key])
    style = result.data.get("style")
    if style and style.get("rules"):
        console.print(_rule_table(style["rules"]))
    if verbose:
        _render_meta(console, result)


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        if isinstance(value, (dict, list)):
            _field(console, key, _json.dumps(value, separators=(",", ":")))
        else:
            _field(console, key, value)
    if verbose:
        _render_meta(console, result)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Any] = {
    "write_style": _render_write,
    "read_style": _render_read,
    "render_filter": _render_generic,
    "parse_filter": _render_generic,
}
