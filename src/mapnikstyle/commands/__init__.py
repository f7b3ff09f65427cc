"""Subcommand modules for mapnikstyle.

Provides register_commands() which uses deferred imports to keep
``mapnikstyle --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all command groups and standalone commands on the root CLI group."""
    # --- Groups ---
    from mapnikstyle.commands.filter_cmd import filter_group

    cli.add_command(filter_group)

    # --- Standalone commands ---
    from mapnikstyle.commands.read import read
    from mapnikstyle.commands.write import write

    cli.add_command(write)
    cli.add_command(read)
