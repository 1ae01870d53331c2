"""Command: round a single value, for trying out scales."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from fpfixer.commands._base import FpCommand

if TYPE_CHECKING:
    from fpfixer.commands._context import AppContext


@click.command(
    "round",
    cls=FpCommand,
    examples="""\
  fpfixer round 4.7250000000000005 --scale 3
  fpfixer round 9.9700002 -s 2 --ceil
  fpfixer -q round -s 2 -- -1.005""",
)
@click.argument("value", type=float)
@click.option("-s", "--scale", type=int, required=True, help="Fraction digits to keep.")
@click.option("--ceil", is_flag=True, help="Use arithmetic round-up instead of decimal rounding.")
@click.pass_obj
def round_cmd(app: AppContext, value: float, scale: int, ceil: bool) -> None:
    """Round VALUE to SCALE fraction digits."""
    from fpfixer.domain.registry import Registry
    from fpfixer.services.payload import PayloadService

    app.emit(PayloadService(Registry({})).round_value(value, scale, ceil=ceil))
