"""
Infrastructure Layer Package

This package contains implementations of interfaces defined in the
domain layer, dealing with external concerns such as HTTP endpoints,
name resolution, the Kubernetes API and webhooks.
"""

from kubecheck.infrastructure import dns, hooks, http, kubernetes

__all__ = ["dns", "hooks", "http", "kubernetes"]
