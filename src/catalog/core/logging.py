"""Logging configuration using structlog.

Everything goes through the stdlib root logger so uvicorn and SQLAlchemy
records share the same stream. Request-scoped keys (request_id, principal_id)
live in structlog contextvars and are merged into every event.
"""

import logging
import sys

import structlog
from structlog.contextvars import bind_contextvars, clear_contextvars

# Third-party loggers that are too chatty at INFO
QUIET_LOGGERS = ("sqlalchemy.engine", "aiosqlite", "httpx", "httpcore")


def setup_logging(debug: bool = False, level: str = "INFO") -> None:
    """Configure structlog for structured logging.

    Args:
        debug: Colored console output and DEBUG level instead of JSON lines.
        level: Log level name used when not in debug mode.
    """
    log_level = logging.DEBUG if debug else logging.getLevelNamesMapping().get(
        level.upper(), logging.INFO
    )
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=log_level, force=True)

    processors: list[structlog.typing.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
    ]

    if debug:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))
    else:
        processors += [
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def bind_request_context(request_id: str | None) -> None:
    """Bind the correlation id of the current request to all subsequent log calls."""
    if request_id:
        bind_contextvars(request_id=request_id)


def bind_principal_context(principal_id: str | None) -> None:
    """Bind the authenticated principal (token subject) to all subsequent log calls."""
    if principal_id:
        bind_contextvars(principal_id=principal_id)


def clear_request_context() -> None:
    clear_contextvars()
