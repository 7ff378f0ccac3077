"""
Domain Layer Package

This package contains the core rules of the application: the assertion
model, the expectation evaluation engine and the healthcheck variants. It
talks to the outside world only through the ports and gateways it defines.
"""

from kubecheck.domain import checks, entities, gateways, ports, services

__all__ = ["checks", "entities", "gateways", "ports", "services"]
