"""structlog configuration for logrange.

Two output modes, both on stderr so stdout stays pipeable:
- Human (default): console renderer, colored on a TTY
- JSON (--log-json): structured JSON lines

Stdlib loggers under ``logrange.*`` (the domain layer) are routed through
the same processor chain, so their records carry level, logger name,
timestamp, and any invocation context bound with :func:`bind_invocation`.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

_NOISY_LOGGERS = ("dateparser", "tzlocal")


def configure_logging(
    *,
    verbose: bool = False,
    quiet: bool = False,
    log_json: bool = False,
) -> None:
    """Configure structlog processors and output routing.

    Args:
        verbose: Enable DEBUG-level output for ``logrange`` loggers.
        quiet: Only ERROR+ (ignored when *verbose* is set).
        log_json: Use JSON renderer instead of console renderer.
    """
    if verbose:
        app_level = logging.DEBUG
    elif quiet:
        app_level = logging.ERROR
    else:
        app_level = logging.WARNING

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

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.WARNING)

    logging.getLogger("logrange").setLevel(app_level)
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def bind_invocation(**context: Any) -> None:
    """Attach *context* to every log record for the rest of the invocation."""
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(**context)
