"""Logging setup shared by every layer.

Loggers are structlog wrappers over stdlib loggers in the
``intercom_cli`` namespace.  Until :func:`setup_logging` attaches a
handler nothing below WARNING is emitted, and records never go to
stdout.

Usage::

    from intercom_cli.utils.log import get_logger

    logger = get_logger(__name__)
    logger.debug("Fetched page %d of %s", 2, "/contacts")
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog
from structlog.typing import Processor

ROOT_LOGGER = "intercom_cli"

_SHARED_PROCESSORS: list[Processor] = [
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.stdlib.PositionalArgumentsFormatter(),
    structlog.processors.TimeStamper(fmt="%H:%M:%S"),
    structlog.processors.StackInfoRenderer(),
]


def _configure_structlog() -> None:
    structlog.configure(
        processors=[structlog.stdlib.filter_by_level] + _SHARED_PROCESSORS + [
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> Any:
    """Return a structlog logger bound to the stdlib logger *name*."""
    if not structlog.is_configured():
        _configure_structlog()
    return structlog.get_logger(name)


def setup_logging(verbose: bool = False) -> None:
    """Route ``intercom_cli`` log records to stderr.

    ``verbose`` lowers the level from WARNING to DEBUG.  Calling this
    again replaces the previous handler.
    """
    level = logging.DEBUG if verbose else logging.WARNING
    _configure_structlog()

    formatter = structlog.stdlib.ProcessorFormatter(
        processor=structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()),
        foreign_pre_chain=_SHARED_PROCESSORS,
    )
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)
    handler.setLevel(level)

    root = logging.getLogger(ROOT_LOGGER)
    for existing in root.handlers[:]:
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(level)
    root.propagate = False
