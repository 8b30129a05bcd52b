"""
Structured logging configuration for Decaminx.

Uses structlog (https://www.structlog.org/) to provide structured, context-rich
logging. Stderr gets colored console lines (development) or JSON lines. An
optional log file always gets JSON lines, so the events of a long sampling run
can be filtered afterwards.

Usage::

    from decaminx.core.logging import configure_logging, get_logger

    configure_logging(json_output=False)  # Call once at startup
    logger = get_logger(__name__)
    logger.info("boundary_sampling_complete", lattice_points=4096, boundary_points=812)
"""

import logging
import sys
from typing import Optional

import structlog


def _formatter(*renderers: structlog.types.Processor) -> structlog.stdlib.ProcessorFormatter:
    return structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            *renderers,
        ],
    )


def _json_formatter() -> structlog.stdlib.ProcessorFormatter:
    return _formatter(
        structlog.processors.dict_tracebacks,
        structlog.processors.JSONRenderer(),
    )


def configure_logging(
    level: str = "INFO",
    json_output: bool = False,
    log_file: Optional[str] = None,
) -> None:
    """
    Configure structured logging for the entire application.

    Call this once at startup (the CLI does it before dispatching commands).

    Args:
        level: Minimum log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        json_output: If True, stderr gets JSON lines instead of console lines.
        log_file: Optional path that additionally receives JSON lines.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    stream_handler = logging.StreamHandler(sys.stderr)
    if json_output:
        stream_handler.setFormatter(_json_formatter())
    else:
        stream_handler.setFormatter(_formatter(structlog.dev.ConsoleRenderer()))

    handlers: list[logging.Handler] = [stream_handler]
    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(_json_formatter())
        handlers.append(file_handler)

    logging.basicConfig(level=log_level, handlers=handlers, force=True)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.UnicodeDecoder(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """
    Get a structlog logger for the given module name.

    Args:
        name: Module name, typically ``__name__``.

    Returns:
        A bound structlog logger instance.
    """
    return structlog.get_logger(name)
