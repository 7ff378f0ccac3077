"""Name resolution adapters."""

from .resolver import SystemResolver

__all__ = ["SystemResolver"]
