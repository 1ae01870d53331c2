"""Click base class with --examples support, plus shared options.

When ``--examples`` is passed, the command prints usage examples and
exits. This keeps ``--help`` concise.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any, TypeVar

import click

F = TypeVar("F", bound=Callable[..., Any])


def _add_examples_option(cmd: click.Command, examples: str) -> None:
    """Attach an eager ``--examples`` flag to a Click command."""

    def show_examples(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(examples)
        ctx.exit(0)

    cmd.params.append(
        click.Option(
            ["--examples"],
            is_flag=True,
            expose_value=False,
            is_eager=True,
            callback=show_examples,
            help="Show usage examples.",
        )
    )


class FpCommand(click.Command):
    """Click Command subclass that supports an ``--examples`` flag."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            _add_examples_option(self, examples)


def registry_option(func: F) -> F:
    """``-r/--registry``: extra registry files, merged after configured ones."""
    return click.option(
        "-r",
        "--registry",
        "registries",
        multiple=True,
        type=click.Path(exists=True, dir_okay=False, path_type=Path),
        help="Registry file (.json or .toml). Repeatable; later files win.",
    )(func)
