"""Structlog configuration for the favorites service.

The renderer is chosen by the FAVORITES_LOG_FORMAT setting: "console"
for colored development output, "json" for log shipping, and "auto"
to pick console output on a TTY (or when FORCE_COLOR is set).
"""

import logging
import os
import sys

import structlog

SERVICE_NAME = "favorite-groups"


def _add_service_name(
    logger: structlog.types.WrappedLogger,
    method_name: str,
    event_dict: structlog.types.EventDict,
) -> structlog.types.EventDict:
    event_dict.setdefault("service", SERVICE_NAME)
    return event_dict


def _wants_console(log_format: str) -> bool:
    if log_format != "auto":
        return log_format == "console"
    force_color = os.environ.get("FORCE_COLOR", "").lower() in ("1", "true", "yes")
    return force_color or sys.stdout.isatty()


def configure_logging(level: str = "INFO", log_format: str = "auto") -> None:
    """Configure structlog for the group cache and store probes.

    Args:
        level: Minimum level name to emit (e.g. "DEBUG", "INFO")
        log_format: "console", "json" or "auto"

    Raises:
        ValueError: If the log format is unknown
    """
    if log_format not in ("auto", "console", "json"):
        raise ValueError(f"Unknown log format: {log_format}")

    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        _add_service_name,
        structlog.processors.StackInfoRenderer(),
    ]
    if _wants_console(log_format):
        processors.append(structlog.dev.ConsoleRenderer(colors=True))
    else:
        processors.extend(
            [
                structlog.processors.format_exc_info,
                structlog.processors.JSONRenderer(),
            ]
        )

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(level.upper())
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
