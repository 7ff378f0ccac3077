"""
Application Layer Package

This package contains the application-specific rules: running
healthchecks, mapping their results to report DTOs and the use cases
the presentation layer calls into.
"""

# Re-export submodules
from kubecheck.application import dtos, services, use_cases

__all__ = ["dtos", "services", "use_cases"]
