"""Root CLI group for mapnikstyle: output-mode flags, config selection, subcommands."""

from __future__ import annotations

import click

from mapnikstyle import __version__
from mapnikstyle.commands import register_commands
from mapnikstyle.commands._context import AppContext
from mapnikstyle.config.settings import StyleSettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="mapnikstyle")
@click.option("--json", "json_output", is_flag=True, help="Print results as JSON.")
@click.option("-q", "--quiet", is_flag=True, help="One-line results; log errors only.")
@click.option(
    "-v", "--verbose", is_flag=True, help="Rule tables, meta counts and per-rule debug logs."
)
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Config file to use instead of mapnikstyle.toml discovery.",
)
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
) -> None:
    """mapnikstyle: translate neutral map styles to and from Mapnik XML.

    \b
    write   neutral JSON/YAML style -> Mapnik XML
    read    Mapnik XML -> neutral JSON/YAML style
    filter  convert a single filter expression
    """
    if quiet and verbose:
        raise click.UsageError("--quiet and --verbose cannot be combined.", ctx=ctx)
    ctx.ensure_object(dict)
    settings = StyleSettings.from_cli(
        config_path=config_path,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
