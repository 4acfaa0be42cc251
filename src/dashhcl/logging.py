"""
Structured logging for dashhcl.

Logs are JSON lines on stderr; stdout is reserved for generated HCL and
reports, so ``dashhcl convert dashboard.json > main.tf`` stays clean at any
log level.
"""

import logging
import sys
from typing import IO, Any

import structlog

DEFAULT_LEVEL = logging.WARNING


def resolve_level(level: int | str | None) -> tuple[int, bool]:
    """Map a level name or number to a logging level.

    Returns:
        (level, recognised). Unknown names resolve to WARNING.
    """
    if level is None or level == "":
        return DEFAULT_LEVEL, True
    if isinstance(level, int):
        return level, True
    resolved = logging.getLevelName(str(level).strip().upper())
    if isinstance(resolved, int):
        return resolved, True
    return DEFAULT_LEVEL, False


def configure_logging(level: int | str | None = DEFAULT_LEVEL, stream: IO[str] | None = None) -> None:
    """Configure the structlog/standard logging bridge writing JSON to ``stream`` (stderr)."""
    numeric_level, recognised = resolve_level(level)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(sort_keys=True),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        level=numeric_level,
        format="%(message)s",
        stream=stream or sys.stderr,
        force=True,
    )

    if not recognised:
        structlog.get_logger().warning("unknown_log_level", requested=str(level), using="WARNING")


def bind_context(**kwargs: Any) -> structlog.stdlib.BoundLogger:
    """Return a logger carrying ``kwargs`` on every event it emits."""

    logger = structlog.get_logger()
    return logger.bind(**kwargs)
