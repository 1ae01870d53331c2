"""Subcommand modules for fpfixer.

Provides register_commands() which uses deferred imports to keep
``fpfixer --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register the standalone commands on the root CLI group."""
    from fpfixer.commands.entities import entities, resolve
    from fpfixer.commands.fix import fix
    from fpfixer.commands.round_cmd import round_cmd

    cli.add_command(fix)
    cli.add_command(entities)
    cli.add_command(resolve)
    cli.add_command(round_cmd)
