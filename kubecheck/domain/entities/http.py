"""
HTTP observation entities.

Library independent snapshots of what an HTTP probe saw. The infrastructure
HTTP client builds these; expectations only ever read them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Dict, Optional, Tuple


@dataclass(frozen=True, slots=True)
class PeerCertificate:
    """A certificate presented by the server during the TLS handshake."""

    subject: str
    issuer: str
    not_after: datetime

    def expires_in_days(self, now: datetime) -> int:
        """Whole days left until expiry, truncated toward zero."""
        return int((self.not_after - now).total_seconds() / 86400)


@dataclass(frozen=True, slots=True)
class HttpObservation:
    """Response of a single HTTP request plus the time it took."""

    url: str
    status_code: int
    elapsed: timedelta
    body: str = ""
    headers: Dict[str, str] = field(default_factory=dict)
    certificates: Tuple[PeerCertificate, ...] = ()

    def header(self, name: str) -> str:
        """Case-insensitive header lookup; missing headers read as ``""``."""
        wanted = name.lower()
        for key, value in self.headers.items():
            if key.lower() == wanted:
                return value
        return ""


@dataclass(frozen=True, slots=True)
class PingResult:
    """Outcome of pinging one endpoint; ``status_code`` is 0 when unreachable."""

    host: str
    port: int
    url: str
    status_code: int
    elapsed: timedelta
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status_code == 200
