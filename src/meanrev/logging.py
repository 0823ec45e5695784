"""Structured logging for the signal desk.

structlog renders every record, including the stdlib records emitted by
uvicorn and ccxt. Context bound with ``symbol_context`` lives in a
contextvar, so each concurrently scanned symbol keeps its own ``symbol``
field.
"""

import logging
from contextlib import AbstractContextManager

import structlog

#: Third-party loggers that are chatty at INFO.
_NOISY_LOGGERS = ("ccxt", "uvicorn.access", "httpx")


def setup_logging(log_level: str = "INFO", log_format: str = "console") -> None:
    """Install structlog processors and a single root handler.

    Args:
        log_level: Root level name (e.g., "DEBUG").
        log_format: "json" for machine-readable lines, anything else renders
            for the console.
    """
    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    renderer: structlog.types.Processor
    if log_format.lower() == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[*shared_processors, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler()
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared_processors,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                renderer,
            ],
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Return a structlog logger named after the calling module."""
    return structlog.get_logger(name)


def symbol_context(symbol: str) -> AbstractContextManager:
    """Bind ``symbol`` to every log event emitted inside the block."""
    return structlog.contextvars.bound_contextvars(symbol=symbol)
