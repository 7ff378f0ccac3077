"""Domain port for issuing HTTP probes."""

from __future__ import annotations

from typing import Protocol

from kubecheck.domain.entities.http import HttpObservation


class IHttpClient(Protocol):
    """Issues HTTP requests on behalf of healthchecks and notifiers."""

    async def get(self, url: str) -> HttpObservation:
        """Perform a GET request and return what was observed.

        Raises:
            ObservationError: If no response could be obtained.
        """
        ...

    async def post(self, url: str, data: str = "") -> HttpObservation:
        """Perform a POST request with ``data`` as the body.

        Raises:
            ObservationError: If no response could be obtained.
        """
        ...
