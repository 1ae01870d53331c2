"""Rich Console factory and theme for fpfixer output.

Consoles render to a StringIO buffer so renderers keep a plain
``-> str`` contract. In non-TTY environments (tests, pipes) Rich drops
color codes on its own.
"""

from __future__ import annotations

from collections.abc import Mapping
from io import StringIO
from typing import Any

from rich.console import Console
from rich.theme import Theme

FPFIXER_THEME = Theme(
    {
        "fp.ok": "bold green",
        "fp.error": "bold red",
        "fp.warning": "bold yellow",
        "fp.op": "bold cyan",
        "fp.key": "dim",
        "fp.entity": "bold blue",
        "fp.scale": "magenta",
        "fp.ref": "cyan",
        "fp.path": "dim",
    }
)

DEFAULT_WIDTH = 120


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    A fixed width keeps tables and wrapped paths stable across terminals.
    """
    return Console(
        file=StringIO(),
        theme=FPFIXER_THEME,
        no_color=no_color,
        highlight=False,
        width=width or DEFAULT_WIDTH,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_rule(rule: Mapping[str, Any]) -> str:
    """Theme style for a rule in wire form: references vs scale rules."""
    return "fp.ref" if rule.get("entityRef") else "fp.scale"
