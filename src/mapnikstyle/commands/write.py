"""Command: write a neutral style (JSON/YAML) as Mapnik XML."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from mapnikstyle.commands._base import StyleCommand, parse_pairs
from mapnikstyle.config.logging import document_context

if TYPE_CHECKING:
    from mapnikstyle.commands._context import AppContext


@click.command(
    cls=StyleCommand,
    examples="""\
  mapnikstyle write roads.json
  mapnikstyle write roads.yaml --output roads.xml
  mapnikstyle write roads.json --no-map --glyph-base-path /usr/share/symbols
  mapnikstyle write roads.json --map-option srs=+init=epsg:3857 --style-option opacity=0.8
  mapnikstyle write roads.json --skip-invalid""",
)
@click.argument("input_file", metavar="INPUT", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--output",
    "output_file",
    type=click.Path(dir_okay=False),
    default=None,
    help="Output file (omit to print to stdout).",
)
@click.option(
    "--no-map",
    "no_map",
    is_flag=True,
    default=False,
    help="Emit a bare <Style> without the <Map> container.",
)
@click.option(
    "--glyph-base-path",
    default=None,
    help="Directory joined onto well-known mark glyph files.",
)
@click.option(
    "--map-option",
    "map_options",
    multiple=True,
    callback=parse_pairs,
    help="Extra <Map> attribute as key=value (repeatable).",
)
@click.option(
    "--style-option",
    "style_options",
    multiple=True,
    callback=parse_pairs,
    help="Extra <Style> attribute as key=value (repeatable).",
)
@click.option(
    "--skip-invalid",
    is_flag=True,
    default=False,
    help="Skip rules that cannot be translated instead of failing.",
)
@click.pass_obj
def write(
    app: AppContext,
    input_file: str,
    output_file: str | None,
    no_map: bool,
    glyph_base_path: str | None,
    map_options: dict[str, str] | None,
    style_options: dict[str, str] | None,
    skip_invalid: bool,
) -> None:
    """Translate a neutral style document into Mapnik XML."""
    service = app.service(
        include_map=False if no_map else None,
        glyph_base_path=glyph_base_path,
        map=map_options,
        style=style_options,
    )
    source = Path(input_file).read_text(encoding="utf-8")
    with document_context(input_file, "write"):
        result = service.write_style(source, skip_invalid=skip_invalid)

    if not result.ok or app.settings.json_output:
        app.emit(result)
        return

    if output_file:
        Path(output_file).write_text(result.data["markup"], encoding="utf-8")
        app.emit(result.with_data(drop=("markup",), output_file=output_file))
    else:
        # Pipe-friendly: raw markup to stdout
        click.echo(result.data["markup"], nl=False)
        app.warn(result)
