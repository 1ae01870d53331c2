"""AppContext: shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``. Builds the payload service on demand and centralizes
result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import TYPE_CHECKING, Any

import click

from fpfixer.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from fpfixer.config.settings import FpFixerSettings
    from fpfixer.services.payload import PayloadService
    from fpfixer.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    Registry files are only read when a command asks for the service, so
    ``--help`` and ``round`` never touch the filesystem.
    """

    def __init__(self, settings: FpFixerSettings) -> None:
        self.settings = settings

        from fpfixer.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    def service(self, extra_registries: Iterable[Path] = ()) -> PayloadService:
        """Build a PayloadService; registry load errors become ClickExceptions."""
        from fpfixer.domain.errors import RegistryLoadError
        from fpfixer.services.payload import PayloadService

        try:
            return PayloadService.from_settings(self.settings, extra_registries)
        except RegistryLoadError as exc:
            raise click.ClickException(str(exc)) from exc

    def _output_settings(self) -> OutputSettings:
        return OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )

    def _echo_warnings(self, result: ServiceResult) -> None:
        for warning in result.warnings:
            click.echo(f"WARNING: {warning}", err=True)

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings are emitted to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = self._output_settings()
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            # In JSON mode, warnings are already in the serialized payload.
            if not settings.json_output:
                self._echo_warnings(result)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)

    def emit_payload(self, result: ServiceResult, payload: Any) -> None:
        """Write a fixed payload as plain JSON to stdout.

        Failures and ``--json`` mode go through :meth:`emit` instead.
        """
        if not result.ok or self.settings.json_output:
            self.emit(result)
            return
        from fpfixer.infrastructure.loader import dump_payload

        click.echo(dump_payload(payload))
        self._echo_warnings(result)
