"""
Shared module - Cross-cutting concerns / Shared Layer

This module provides shared utilities, constants, and enums that are used
across multiple layers of the application.

Its primary responsibilities include:
- Defining cross-layer constants (environment names, log levels, check status)
- Configuring structured logging
- Serving as a common place for definitions that do not belong
  exclusively to Domain, Application, or Infrastructure

Shared module contains only *cross-cutting concerns* and must not depend on
Infrastructure or Frameworks.
"""

from .consts import EnumCheckStatus, EnumEnvironment, EnumLogLevel
from .logging import configure_logging, get_logger, update_logging_from_settings
from .urls import clean_url, url_host

__all__ = [
    "EnumCheckStatus",
    "EnumEnvironment",
    "EnumLogLevel",
    "clean_url",
    "url_host",
    "configure_logging",
    "get_logger",
    "update_logging_from_settings",
]
