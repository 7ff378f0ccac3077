"""
Presentation Layer Package

This package contains the presentation layer components,
which are responsible for handling HTTP requests and responses,
including API routes, controllers, and middleware.
"""

from kubecheck.presentation import controllers, middleware

__all__ = ["controllers", "middleware"]
