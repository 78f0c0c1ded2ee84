"""structlog configuration for typed_prefs.

Two output modes:
- Human (default): console output to stderr
- JSON (``log_json=True``): structured JSON lines to stderr

The preference trace is emitted at DEBUG level, so the default WARNING
level keeps it silent.
"""

from __future__ import annotations

import logging
import sys

import structlog


def configure_logging(
    *,
    level: str | int = logging.WARNING,
    log_json: bool = False,
) -> None:
    """Configure structlog processors and output routing.

    Args:
        level: Level for the ``typed_prefs`` logger, as a name or number.
        log_json: Use JSON renderer instead of console renderer.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if log_json:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    prefs_logger = logging.getLogger("typed_prefs")
    prefs_logger.handlers.clear()
    prefs_logger.addHandler(handler)
    prefs_logger.setLevel(level)
    prefs_logger.propagate = False
