"""
Structured logging for the loader.

Log events go to stderr so the CLI's rich tables on stdout stay clean.
Filtering happens in structlog's bound logger; the standard library
``logging`` module only supplies the level numbers.
"""

import logging
import sys
from contextlib import AbstractContextManager
from typing import Any, TextIO

import structlog


def configure_logging(
    level: str = "INFO",
    json_output: bool = False,
    stream: TextIO | None = None,
) -> None:
    """
    Configure structured logging for a load or verify run.

    Loggers are not cached, so module-level loggers pick up a later
    reconfiguration (a second CLI invocation in the same process, tests).

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
            Unknown names fall back to INFO.
        json_output: If True, emit one JSON object per event.
        stream: Destination for log lines; defaults to stderr.
    """
    log_level = logging.getLevelNamesMapping().get(level.upper(), logging.INFO)
    output = stream if stream is not None else sys.stderr

    processors: list[structlog.typing.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]
    if json_output:
        processors += [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=output.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=output),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str | None = None) -> structlog.typing.FilteringBoundLogger:
    """Get a logger named after the calling module."""
    return structlog.get_logger(name)


def log_context(**kwargs: Any) -> AbstractContextManager[None]:
    """
    Bind key/value pairs to every event logged inside the block.

    Example:
        with log_context(entity="lap_time"):
            log.info("Data inserted", rows=5000)  # carries entity=lap_time
    """
    return structlog.contextvars.bound_contextvars(**kwargs)
