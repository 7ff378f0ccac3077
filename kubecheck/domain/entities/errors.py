"""
Domain Errors

This module defines custom error classes for domain-specific exceptions.
"""

from typing import Any, Dict, Optional


class KubecheckError(Exception):
    """Base class for domain errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class ObservationError(KubecheckError):
    """Raised by a probe when the external observation itself fails."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)


class ExpectationTypeError(KubecheckError):
    """Raised when a healthcheck is configured with an expectation it cannot verify."""

    def __init__(
        self,
        check_kind: str,
        expectation: Any,
        details: Optional[Dict[str, Any]] = None,
    ):
        message = (
            f"{type(expectation).__name__} is not a valid expectation "
            f"for {check_kind} healthchecks"
        )
        super().__init__(message, details)


class DuplicateHealthcheckError(KubecheckError):
    """Raised when two healthchecks of one catalog share a name."""

    def __init__(self, name: str, details: Optional[Dict[str, Any]] = None):
        message = f"Healthcheck name {name!r} is used more than once"
        super().__init__(message, details)


class HealthcheckNotFoundError(KubecheckError):
    """Raised when a healthcheck cannot be found by name."""

    def __init__(self, name: str, details: Optional[Dict[str, Any]] = None):
        message = f"Healthcheck {name!r} not found"
        super().__init__(message, details)
