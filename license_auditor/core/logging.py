"""Logging for the license-audit CLI — structlog rendered through stdlib logging.

LICENSE_AUDITOR_LOG_LEVEL   — level name (default: INFO; ``-v`` forces DEBUG)
LICENSE_AUDITOR_LOG_FORMAT  — console | json (default: console)
"""

from __future__ import annotations

import logging
import os
import sys

import structlog

_PRE_CHAIN: list[structlog.types.Processor] = [
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.processors.TimeStamper(fmt="%H:%M:%S"),
    structlog.processors.format_exc_info,
]


def _renderer(log_format: str) -> structlog.types.Processor:
    if log_format == "json":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def setup_logging(verbose: bool = False) -> None:
    """Send every ``license_auditor.*`` event to stderr.

    stdout is left alone so ``list --json`` output stays parseable.
    """
    level = "DEBUG" if verbose else os.environ.get("LICENSE_AUDITOR_LOG_LEVEL", "INFO").upper()
    log_format = os.environ.get("LICENSE_AUDITOR_LOG_FORMAT", "console").lower()

    structlog.configure(
        processors=_PRE_CHAIN + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=_PRE_CHAIN,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(log_format),
            ],
        )
    )

    logger = logging.getLogger("license_auditor")
    logger.handlers[:] = [handler]
    logger.setLevel(level)
    logger.propagate = False
