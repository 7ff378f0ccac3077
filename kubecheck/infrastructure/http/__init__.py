"""HTTP client adapters."""

from .http_client import HttpxHttpClient, peer_certificates

__all__ = ["HttpxHttpClient", "peer_certificates"]
