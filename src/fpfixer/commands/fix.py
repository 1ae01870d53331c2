"""Command: round the configured fields of a JSON payload."""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING

import click

from fpfixer.commands._base import FpCommand, registry_option
from fpfixer.domain.limits import MAX_RECURSION_CEILING

if TYPE_CHECKING:
    from fpfixer.commands._context import AppContext


@click.command(
    cls=FpCommand,
    examples="""\
  fpfixer fix response.json --entity casePackDetail
  fpfixer fix response.json -e getSpaceManagement -r entities.toml
  curl -s $API/casepack | fpfixer fix - -e casePackMetadata
  fpfixer fix rows.json --rules '[{"scale": 2, "names": ["qty"]}]'
  fpfixer fix response.json -e casePackDetail -o fixed.json
  fpfixer --json fix response.json -e casePackDetail""",
)
@click.argument("payload", type=click.Path(allow_dash=True, dir_okay=False))
@click.option("-e", "--entity", default=None, help="Registry entity describing the payload.")
@click.option(
    "--rules",
    default=None,
    help="Inline rule list as JSON (or @file). Takes precedence over --entity.",
)
@registry_option
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write the fixed payload here instead of stdout.",
)
@click.option(
    "--max-recursion",
    type=click.IntRange(min=0, max=MAX_RECURSION_CEILING),
    default=None,
    help="Override [fixer] max_recursion for this run.",
)
@click.pass_obj
def fix(
    app: AppContext,
    payload: str,
    entity: str | None,
    rules: str | None,
    registries: tuple[Path, ...],
    output: Path | None,
    max_recursion: int | None,
) -> None:
    """Round floating-point fields of PAYLOAD (a JSON file, or - for stdin)."""
    from fpfixer.infrastructure.loader import load_payload, write_payload

    try:
        data = load_payload(payload)
    except (OSError, json.JSONDecodeError) as exc:
        raise click.ClickException(f"Cannot read payload {payload}: {exc}") from exc

    inline_rules = _parse_rules(rules) if rules is not None else None
    result = app.service(registries).fix(
        data, entity=entity, rules=inline_rules, max_recursion=max_recursion
    )

    if output is None:
        app.emit_payload(result, data)
        return

    if result.ok:
        write_payload(output, data)
        summary = {k: v for k, v in result.data.items() if k != "payload"}
        result = result.model_copy(update={"data": {**summary, "output": str(output)}})
    app.emit(result)


def _parse_rules(raw: str) -> object:
    """Decode ``--rules`` JSON, reading ``@path`` references from disk."""
    text = raw
    if raw.startswith("@"):
        try:
            text = Path(raw[1:]).read_text(encoding="utf-8")
        except OSError as exc:
            raise click.BadParameter(str(exc), param_hint="--rules") from exc
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise click.BadParameter(f"not valid JSON: {exc}", param_hint="--rules") from exc
