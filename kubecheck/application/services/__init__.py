"""
Services Package - Application Layer

This package contains the services orchestrating healthcheck executions.
"""

from .healthcheck_runner import HealthcheckRunner

__all__ = ["HealthcheckRunner"]
