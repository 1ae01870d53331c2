"""Root CLI group for fpfixer with global flags and command registration."""

from __future__ import annotations

import click

from fpfixer import __version__
from fpfixer.commands import register_commands
from fpfixer.commands._context import AppContext
from fpfixer.config.settings import FpFixerSettings


_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


@click.group(invoke_without_command=True, context_settings=_CONTEXT_SETTINGS)
@click.version_option(version=__version__, prog_name="fpfixer")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug logs.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
) -> None:
    """fpfixer — round floating-point fields of JSON payloads to fixed scales.

    Rules come from registry files (fpfixer.toml [registry] paths, or -r),
    inline [entities] tables, or --rules on the fix command.
    """
    ctx.ensure_object(dict)
    settings = FpFixerSettings.from_cli(
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
