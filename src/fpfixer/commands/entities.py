"""Commands: inspect the entity registry."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from fpfixer.commands._base import FpCommand, registry_option

if TYPE_CHECKING:
    from fpfixer.commands._context import AppContext


@click.command(
    cls=FpCommand,
    examples="""\
  fpfixer entities
  fpfixer entities -r entities.json -r overrides.toml
  fpfixer -q entities""",
)
@registry_option
@click.pass_obj
def entities(app: AppContext, registries: tuple[Path, ...]) -> None:
    """List registered entities with their scales and references."""
    app.emit(app.service(registries).list_entities())


@click.command(
    cls=FpCommand,
    examples="""\
  fpfixer resolve PRDSPC
  fpfixer resolve prdspc
  fpfixer --json resolve casePackDetail""",
)
@click.argument("name")
@registry_option
@click.pass_obj
def resolve(app: AppContext, name: str, registries: tuple[Path, ...]) -> None:
    """Show the rule list NAME resolves to (exact name, then upper-case)."""
    app.emit(app.service(registries).resolve(name))
