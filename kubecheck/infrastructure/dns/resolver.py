"""Resolver backed by the event loop's ``getaddrinfo``."""

from __future__ import annotations

import asyncio
import socket
from typing import List

from kubecheck.domain.entities.errors import ObservationError
from kubecheck.domain.ports.resolver import IResolver
from kubecheck.shared import get_logger

logger = get_logger(__name__)


class SystemResolver(IResolver):
    """Resolves host names with the system resolver without blocking the loop."""

    async def resolve(self, host: str) -> List[str]:
        loop = asyncio.get_running_loop()
        try:
            infos = await loop.getaddrinfo(host, None, type=socket.SOCK_STREAM)
        except (socket.gaierror, OSError) as exc:
            logger.debug("dns.lookup.error", host=host, error=str(exc))
            raise ObservationError(
                f"lookup {host} failed: {exc}", details={"host": host}
            ) from exc

        addresses: List[str] = []
        for _family, _type, _proto, _canonname, sockaddr in infos:
            address = sockaddr[0]
            if address not in addresses:
                addresses.append(address)

        logger.debug("dns.lookup", host=host, addresses=addresses)
        return addresses
