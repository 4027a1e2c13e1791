"""
Centralized logging configuration for the rate chart engine.

All components log through structlog so that normalization decisions
(dropped records, fallback tiers, empty channels) come out as structured
events that can be rendered for a console or shipped as JSON.
"""
import logging
import sys
from typing import Any, Optional

import structlog
from structlog.types import FilteringBoundLogger

from ..config.validation import ValidationError
from ..errors import ConfigurationError


def configure_logging(
    level: str = "INFO",
    format_json: bool = False,
    include_timestamp: bool = True,
    include_caller: bool = False,
    extra_processors: Optional[list] = None
) -> None:
    """
    Configure structlog for the entire application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_json: If True, output JSON format; otherwise human-readable
        include_timestamp: Include timestamp in log output
        include_caller: Include caller information (filename, line number)
        extra_processors: Additional structlog processors to include

    Raises:
        ConfigurationError: If ``level`` is not a standard level name
    """
    log_level = logging.getLevelName(level.upper())
    # getLevelName maps unknown names to a "Level x" string
    if not isinstance(log_level, int):
        raise ConfigurationError(
            f"Unknown log level: {level}",
            errors=[ValidationError(field="logging.level",
                                    message="must be a standard logging level name",
                                    value=level)],
        )

    logging.basicConfig(
        level=log_level,
        stream=sys.stdout,
        format="%(message)s"  # rendered by structlog
    )

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if include_timestamp:
        processors.append(structlog.processors.TimeStamper(fmt="iso"))

    if include_caller:
        processors.append(structlog.processors.CallsiteParameterAdder(
            parameters=[structlog.processors.CallsiteParameter.FILENAME,
                        structlog.processors.CallsiteParameter.LINENO]
        ))

    # Caller processors see the event before it is rendered
    if extra_processors:
        processors.extend(extra_processors)

    # Renderer must stay last
    if format_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> FilteringBoundLogger:
    """Structlog logger for a module, typically called with ``__name__``."""
    return structlog.get_logger(name)


def log_fallback_decision(
    logger: FilteringBoundLogger,
    channel: str,
    strategy: str,
    point_count: int,
    record_count: int,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log which parsing tier produced a channel series.

    Args:
        logger: Structlog logger instance
        channel: Currency channel being built
        strategy: Tier that produced the result ("strict", "lax" or "none")
        point_count: Number of usable channel points
        record_count: Number of raw records in the payload
        context: Additional context data
    """
    bound_logger = logger.bind(
        subsystem="series",
        channel=channel,
        strategy=strategy,
        point_count=point_count,
        record_count=record_count,
    )

    if context:
        bound_logger = bound_logger.bind(context=context)

    if strategy == "strict":
        bound_logger.debug("Channel series built")
    elif strategy == "lax":
        bound_logger.info("Channel series built with lax value parser")
    else:
        bound_logger.warning("Channel series empty after fallback")
