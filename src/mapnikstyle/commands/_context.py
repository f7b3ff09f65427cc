"""AppContext: shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``. Provides service construction and centralized
result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import click

from mapnikstyle.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from mapnikstyle.config.settings import StyleSettings
    from mapnikstyle.services.result import ServiceResult
    from mapnikstyle.services.translate import TranslationService


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    Subcommands access it via ``@click.pass_obj``.
    """

    def __init__(self, settings: StyleSettings) -> None:
        self.settings = settings

        from mapnikstyle.config.logging import configure_logging

        configure_logging(
            verbose=settings.verbose,
            quiet=settings.quiet,
            log_json=settings.log_json,
        )

    def service(self, **output_overrides: Any) -> TranslationService:
        """Build a TranslationService from configured output options.

        Keyword overrides (``None`` means "not given") come from
        command-level flags and take priority over the config file.
        """
        from mapnikstyle.services.translate import TranslationService

        return TranslationService(self.settings.with_output(**output_overrides))

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings are emitted to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            if not settings.json_output:
                self.warn(result)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)

    def warn(self, result: ServiceResult) -> None:
        """Echo result warnings to stderr."""
        for warning in result.warnings:
            click.echo(f"WARNING: {warning}", err=True)
