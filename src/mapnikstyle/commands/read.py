"""Command: read Mapnik XML back into a neutral style document."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from mapnikstyle.commands._base import StyleCommand
from mapnikstyle.config.logging import document_context

if TYPE_CHECKING:
    from mapnikstyle.commands._context import AppContext


@click.command(
    cls=StyleCommand,
    examples="""\
  mapnikstyle read roads.xml
  mapnikstyle read roads.xml --format yaml
  mapnikstyle read roads.xml --output roads.json
  mapnikstyle --json read roads.xml""",
)
@click.argument("input_file", metavar="INPUT", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--format",
    "fmt",
    type=click.Choice(["json", "yaml"], case_sensitive=False),
    default="json",
    help="Neutral document format.",
)
@click.option(
    "--output",
    "output_file",
    type=click.Path(dir_okay=False),
    default=None,
    help="Output file (omit to print to stdout).",
)
@click.option(
    "--skip-invalid",
    is_flag=True,
    default=False,
    help="Skip rules that cannot be translated instead of failing.",
)
@click.pass_obj
def read(
    app: AppContext,
    input_file: str,
    fmt: str,
    output_file: str | None,
    skip_invalid: bool,
) -> None:
    """Translate a Mapnik XML document into a neutral style document."""
    from mapnikstyle.infrastructure.documents import dump_document

    with document_context(input_file, "read"):
        result = app.service().read_style(
            Path(input_file).read_bytes(), skip_invalid=skip_invalid
        )

    if not result.ok or app.settings.json_output:
        app.emit(result)
        return

    text = dump_document(result.data["style"], "yaml" if fmt.lower() == "yaml" else "json")
    if output_file:
        Path(output_file).write_text(text, encoding="utf-8")
        app.emit(result.with_data(output_file=output_file))
    else:
        # Pipe-friendly: raw document to stdout
        click.echo(text, nl=False)
        app.warn(result)
