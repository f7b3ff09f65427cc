"""Command group: translate a single filter either way."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import click

from mapnikstyle.commands._base import StyleGroup

if TYPE_CHECKING:
    from mapnikstyle.commands._context import AppContext

_FILTER_EXAMPLES = """\
  mapnikstyle filter render '["==", "name", "foo"]'
  mapnikstyle filter parse "([a] = '1') and ([b] > '2')"
  mapnikstyle -q filter render '["&&", ["==", "a", "1"], [">", "b", "2"]]'"""


@click.group("filter", cls=StyleGroup, examples=_FILTER_EXAMPLES)
def filter_group() -> None:
    """Translate filters between neutral JSON and Mapnik expressions."""


@filter_group.command(
    examples="""\
  mapnikstyle filter render '["==", "name", "foo"]'
  mapnikstyle filter render '["!", ["<", "pop", "1000"]]'"""
)
@click.argument("expr_json", metavar="EXPR_JSON")
@click.pass_obj
def render(app: AppContext, expr_json: str) -> None:
    """Render a neutral filter (JSON array) as a Mapnik expression."""
    try:
        filter_ = json.loads(expr_json)
    except json.JSONDecodeError as exc:
        msg = f"not valid JSON: {exc.msg}"
        raise click.BadParameter(msg, param_hint="EXPR_JSON") from exc
    app.emit(app.service().render_filter(filter_))


@filter_group.command(
    examples="""\
  mapnikstyle filter parse "[name] == 'foo'"
  mapnikstyle --json filter parse "not ([type] = 'park')\""""
)
@click.argument("expression")
@click.pass_obj
def parse(app: AppContext, expression: str) -> None:
    """Parse a Mapnik expression into a neutral filter."""
    app.emit(app.service().parse_filter(expression))
