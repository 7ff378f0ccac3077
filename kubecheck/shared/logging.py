"""
Logging Configuration - Shared Layer

Structured logging for the service. Every component logs through structlog
loggers whose events are rendered by the stdlib root handlers, so library
records (httpx, kubernetes, uvicorn) and our own events share one format.
"""

import logging
import os
import sys
from typing import Any, Dict, List, Optional

import structlog
from structlog.types import Processor

from kubecheck.shared.consts import EnumEnvironment

DEFAULT_LOG_LEVEL = "INFO"

# Chatty client libraries are only surfaced when we are debugging ourselves.
NOISY_LOGGERS = ("httpx", "httpcore", "urllib3", "kubernetes")


def _get_log_config_from_env() -> Dict[str, Optional[str]]:
    """
    Read the bootstrap logging configuration from the environment.

    Used before the settings system is available. ``KUBECHECK_LOG_LEVEL``
    wins over ``LOG_LEVEL``.
    """
    return {
        "level": os.environ.get("KUBECHECK_LOG_LEVEL")
        or os.environ.get("LOG_LEVEL", DEFAULT_LOG_LEVEL),
        "file_path": os.environ.get("LOG_FILE_PATH"),
    }


def _build_renderer(environment: str) -> Processor:
    if environment.lower() == EnumEnvironment.PRODUCTION.value:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer()


def configure_logging(
    level: Optional[str] = None,
    file_path: Optional[str] = None,
    environment: str = "development",
) -> None:
    """
    Configure stdlib logging and structlog.

    Call once at startup, before settings are loaded, and again through
    :func:`update_logging_from_settings` once they are.

    Args:
        level: Optional override for the log level.
        file_path: Optional file to mirror console output to.
        environment: Application environment; production renders JSON.
    """
    env_config = _get_log_config_from_env()

    log_level = (level or env_config["level"] or DEFAULT_LOG_LEVEL).upper()
    log_file = file_path or env_config["file_path"]
    numeric_level = getattr(logging, log_level, logging.INFO)

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    timestamper = structlog.processors.TimeStamper(fmt="iso", utc=True)

    formatter = structlog.stdlib.ProcessorFormatter(
        processor=_build_renderer(environment),
        foreign_pre_chain=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            timestamper,
        ],
    )

    for handler in handlers:
        handler.setFormatter(formatter)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            timestamper,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    root_logger.handlers = handlers
    root_logger.setLevel(numeric_level)

    library_level = logging.DEBUG if numeric_level <= logging.DEBUG else logging.WARNING
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(library_level)

    logging.info(f"Logging configured with level: {log_level}")
    if log_file:
        logging.info(f"Logging to file: {log_file}")


def update_logging_from_settings(settings: Any) -> None:
    """
    Re-apply logging configuration from the application settings.

    Args:
        settings: The application settings object (``AppSettings``).
    """
    try:
        log_level = (
            settings.logging.level.value
            if hasattr(settings.logging.level, "value")
            else settings.logging.level
        )
        environment = (
            settings.environment.value
            if hasattr(settings.environment, "value")
            else settings.environment
        )

        configure_logging(
            level=log_level,
            file_path=settings.logging.file_path,
            environment=environment,
        )

        logging.info("Logging configuration updated from application settings")
    except Exception as e:
        logging.error(f"Failed to update logging from settings: {e}")


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger configured for the project."""
    return structlog.get_logger(name)
