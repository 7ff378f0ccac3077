"""Domain ports package."""

from .http_client import IHttpClient
from .lifecycle_notifier import ILifecycleNotifier
from .random_source import IRandomSource
from .resolver import IResolver

__all__ = ["IHttpClient", "ILifecycleNotifier", "IRandomSource", "IResolver"]
