"""Structured logging configuration.

structlog events and plain ``logging`` records (uvicorn, bs4 parser warnings)
share one processor chain and one stdout handler, so both come out as JSON in
production and as console lines elsewhere.
"""

import logging
import sys
from typing import Any

import structlog

from heroscan_api.config import Settings, get_settings

# Extraction core; may run at its own level through CORE_LOG_LEVEL
CORE_LOGGER = "heroscan"

QUIET_LOGGERS = {"uvicorn.access": logging.WARNING}


def _level(name: str) -> int:
    return getattr(logging, name.upper(), logging.INFO)


def setup_logging(settings: Settings | None = None) -> None:
    """Route structlog through the standard library and install the stdout handler."""
    settings = settings or get_settings()
    log_level = _level(settings.log_level)

    shared_processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    renderer: list[Any]
    if settings.is_production:
        renderer = [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    else:
        renderer = [
            structlog.dev.ConsoleRenderer(
                colors=not settings.is_test,
                exception_formatter=structlog.dev.plain_traceback,
            )
        ]

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *shared_processors,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared_processors,
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, *renderer],
        )
    )
    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(log_level)

    # NOTSET inherits the root level
    core_level = _level(settings.core_log_level) if settings.core_log_level else logging.NOTSET
    logging.getLogger(CORE_LOGGER).setLevel(core_level)

    for name, level in QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(level)

    # bs4 reports parser problems through the warnings module
    logging.captureWarnings(True)
