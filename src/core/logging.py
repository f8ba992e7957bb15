"""structlog wiring for the posture store, metrics engine and CLI.

Records are rendered by a single stdlib handler on the root logger, so the
store's mutation events and the CLI's own events share one stream. The CLI
prints indicators on stdout; log lines default to stderr to keep it clean.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

import structlog

from src.core.config import LoggingConfig, get_settings


def _renderer(fmt: str) -> structlog.types.Processor:
    """JSON unless the console renderer is asked for explicitly."""
    if fmt == "console":
        return structlog.dev.ConsoleRenderer(colors=False)
    return structlog.processors.JSONRenderer(sort_keys=True)


def _pre_chain() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]


def setup_logging(
    level: str | None = None,
    fmt: str | None = None,
    *,
    config: LoggingConfig | None = None,
    stream: TextIO | None = None,
) -> logging.Handler:
    """Route structlog through the root logger and return the installed handler.

    Args:
        level: Level name override; unknown names fall back to INFO.
        fmt: "json" or "console" override.
        config: Logging section to use instead of the cached settings.
        stream: Destination for rendered lines. Defaults to stderr.
    """
    cfg = config or get_settings().logging
    log_level = getattr(logging, (level or cfg.level).upper(), None)
    if not isinstance(log_level, int):
        log_level = logging.INFO

    structlog.configure(
        processors=[
            *_pre_chain(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(fmt or cfg.format),
            ],
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(log_level)
    return handler
