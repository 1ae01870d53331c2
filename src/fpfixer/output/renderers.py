"""Operation-specific Rich renderers for ServiceResult.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from fpfixer.output.console import create_console, get_output, style_for_rule

if TYPE_CHECKING:
    from rich.console import Console

    from fpfixer.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich."""
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"
    if result.op == "entities":
        return "\n".join(item["name"] for item in result.data.get("items", []))
    if result.op == "round":
        return str(result.data.get("result"))
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    label = Text("OK", style="fp.ok")
    op = Text(f"  {result.op}", style="fp.op")
    console.print(label, op, end="")
    console.print()


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="fp.key")
    if key in ("entity", "name", "resolved_as"):
        v = Text(str(value), style="fp.entity")
    elif key in ("output", "path"):
        v = Text(str(value), style="fp.path")
    else:
        v = Text(str(value))
    console.print(k, v, sep="")


def _render_diagnostics(console: Console, result: ServiceResult) -> None:
    """List diagnostics with their location (verbose only)."""
    if not result.diagnostics:
        return
    console.print()
    console.print(Text("  diagnostics:", style="dim"))
    for diag in result.diagnostics:
        line = Text("    ")
        line.append(str(diag.code), style="fp.warning")
        line.append(f"  {diag.path}", style="fp.path")
        line.append(f"  {diag.message}")
        console.print(line)


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="fp.error")
    op = Text(f"  {result.op}", style="fp.op")
    console.print(label, op, Text(" — "), Text(msg))
    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(Text(f"    {k}: {v}"))


# ── Operation renderers ───────────────────────────────────────────────


def _render_fix(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Summary of a fix whose payload went to a file."""
    _status_line(console, result)
    for key in ("entity", "output", "fields_fixed", "max_depth"):
        if result.data.get(key) is not None:
            _field(console, key, result.data[key])
    if verbose:
        _render_diagnostics(console, result)


def _render_entities(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    items = result.data.get("items", [])
    if not items:
        console.print("[fp.warning]No entities registered.[/fp.warning]")
        return

    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Entity", style="fp.entity", no_wrap=True)
    table.add_column("Fields", justify="right")
    table.add_column("Scales", style="fp.scale")
    table.add_column("References", style="fp.ref")
    for item in items:
        table.add_row(
            item["name"],
            str(item["fields"]),
            ",".join(str(s) for s in item["scales"]),
            ",".join(item["references"]),
        )
    console.print(table)
    console.print(f"\n{result.data.get('count', len(items))} entities")


def _render_resolve(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    _field(console, "name", result.data["name"])
    if result.data["resolved_as"] != result.data["name"]:
        _field(console, "resolved_as", result.data["resolved_as"])
    for rule in result.data.get("rules", []):
        line = Text("    - ")
        style = style_for_rule(rule)
        if style == "fp.ref":
            line.append(f"ref {rule['entityRef']}", style=style)
            names = rule.get("names")
            line.append(f" -> {', '.join(names)}" if names else " (in place)")
        else:
            line.append(f"scale {rule.get('scale')}", style=style)
            line.append(f": {', '.join(rule.get('names', []))}")
        console.print(line)


def _render_round(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    _field(console, "result", repr(result.data["result"]))
    if verbose:
        _field(console, "value", repr(result.data["value"]))
        _field(console, "scale", result.data["scale"])
        _field(console, "method", result.data["method"])


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        if isinstance(value, (dict, list)):
            _field(console, key, json.dumps(value, separators=(",", ":")))
        else:
            _field(console, key, value)
    if verbose:
        _render_diagnostics(console, result)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Any] = {
    "fix": _render_fix,
    "entities": _render_entities,
    "resolve": _render_resolve,
    "round": _render_round,
}
