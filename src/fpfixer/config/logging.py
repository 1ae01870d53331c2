"""structlog configuration for the fpfixer CLI.

Logs always go to stderr so a fixed payload on stdout can be piped:

- Human (default): console renderer, colored only on a TTY
- JSON (``--log-json``): one JSON object per line

Library modules log through ``logging.getLogger(__name__)`` and never
configure anything themselves. Only the CLI calls :func:`configure_logging`.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

import structlog

LOGGER_NAME = "fpfixer"


def _shared_processors() -> list[structlog.types.Processor]:
    """Processors run for both structlog and foreign (stdlib) records."""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def _renderer(stream: TextIO, *, log_json: bool) -> list[structlog.types.Processor]:
    if log_json:
        return [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    return [structlog.dev.ConsoleRenderer(colors=stream.isatty())]


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
    stream: TextIO | None = None,
) -> logging.Handler:
    """Route all logging through one structlog-formatted stderr handler.

    Args:
        verbose: Show ``fpfixer`` DEBUG and INFO records, diagnostics
            included. Otherwise only WARNING and above.
        log_json: Use the JSON renderer instead of the console renderer.
        stream: Where to write. Defaults to the current ``sys.stderr``.

    Returns:
        The installed handler.
    """
    stream = stream or sys.stderr
    shared = _shared_processors()

    structlog.configure(
        processors=[*shared, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(stream)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                *_renderer(stream, log_json=log_json),
            ],
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(logging.WARNING)

    logging.getLogger(LOGGER_NAME).setLevel(logging.DEBUG if verbose else logging.WARNING)
    return handler
