"""Logging configuration for the Apache status probe.

The dictConfig dictionary is built by a pure function and applied once by
`configure_logging` at CLI start-up. All handlers write to stderr: standard
output carries the single report line and never receives log records.
"""

import logging.config
from typing import Any, Optional

import structlog
from structlog.types import Processor

from apachestatus.config import Settings


# =============================================================================
# CONFIGURATION GENERATORS
# =============================================================================


def get_common_processors() -> list[Processor]:
    """Processors shared by structlog records and foreign stdlib records."""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]


def get_logging_config(settings: Settings, level: Optional[str] = None) -> dict[str, Any]:
    """Build the `logging.config.dictConfig` dictionary for the probe.

    JSON lines in production/staging so log shippers can parse stderr; plain
    console lines in development.

    Args:
        settings: Probe settings containing LOG_LEVEL and ENVIRONMENT.
        level: Optional override of ``settings.LOG_LEVEL`` (e.g. from ``--verbose``).

    Returns:
        dict[str, Any]: Configuration dictionary compatible with dictConfig.
    """
    log_level = (level or settings.LOG_LEVEL).upper()
    is_production = settings.ENVIRONMENT.lower() in ("production", "staging")

    if is_production:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {
                "()": "structlog.stdlib.ProcessorFormatter",
                "processor": renderer,
                "foreign_pre_chain": get_common_processors(),
            },
        },
        "handlers": {
            "console": {
                "level": log_level,
                "class": "logging.StreamHandler",
                "formatter": "default",
                "stream": "ext://sys.stderr",
            },
        },
        "loggers": {
            "": {
                "handlers": ["console"],
                "level": log_level,
                "propagate": True,
            },
            **{
                lib: {"level": "WARNING", "propagate": False}
                for lib in settings.LOGGING_NOISY_MODULES
            },
        },
    }


def configure_structlog_wrapper(settings: Settings) -> None:
    """Route structlog through stdlib logging so `dictConfig` handlers apply."""
    structlog_processors = [
        structlog.stdlib.filter_by_level,
        *get_common_processors(),
        structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
    ]

    structlog.configure(
        processors=structlog_processors,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def configure_logging(settings: Settings, verbose: bool = False) -> None:
    """Apply the stdlib and structlog configuration in order."""
    logging.config.dictConfig(get_logging_config(settings, "debug" if verbose else None))
    configure_structlog_wrapper(settings)


# =============================================================================
# LOGGER RETRIEVAL
# =============================================================================


def get_logger(name: str | None = None) -> Any:
    """Return a lazily bound structlog logger, named after the calling module."""
    if name:
        return structlog.get_logger(name)
    return structlog.get_logger()


# =============================================================================
# CONTEXT VARIABLE EXPORTS
# =============================================================================
# Bound per invocation with the probed host so every record names its target.

bind_contextvars = structlog.contextvars.bind_contextvars
clear_contextvars = structlog.contextvars.clear_contextvars
