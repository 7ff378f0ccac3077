"""httpx based implementation of the HTTP probe port."""

from __future__ import annotations

from datetime import timedelta
from typing import Any, Iterable, List, Optional, Tuple

import httpx
from cryptography import x509

from kubecheck.domain.entities.errors import ObservationError
from kubecheck.domain.entities.http import HttpObservation, PeerCertificate
from kubecheck.domain.ports.http_client import IHttpClient
from kubecheck.shared import get_logger
from kubecheck.shared.urls import clean_url

logger = get_logger(__name__)

DEFAULT_TIMEOUT_SECONDS = 5.0


class HttpxHttpClient(IHttpClient):
    """Shared, pooled HTTP client used by probes and notifiers.

    The underlying ``httpx.AsyncClient`` is created once and reused for every
    request; call :meth:`aclose` on shutdown.
    """

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        verify_tls: bool = False,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._client = httpx.AsyncClient(
            timeout=timeout,
            verify=verify_tls,
            transport=transport,
        )

    async def get(self, url: str) -> HttpObservation:
        return await self._request("GET", url)

    async def post(self, url: str, data: str = "") -> HttpObservation:
        return await self._request(
            "POST",
            url,
            content=data,
            headers={"Content-Type": "application/json"},
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, url: str, **kwargs: Any) -> HttpObservation:
        safe_url = clean_url(url)
        logger.debug("http.request", method=method, url=safe_url)

        try:
            response = await self._client.request(method, url, **kwargs)
        except httpx.HTTPError as exc:
            logger.debug(
                "http.request.error", method=method, url=safe_url, error=str(exc)
            )
            raise ObservationError(
                f"{method} {safe_url} failed: {exc}",
                details={"url": safe_url, "error_type": type(exc).__name__},
            ) from exc

        logger.debug(
            "http.response",
            method=method,
            url=safe_url,
            status_code=response.status_code,
        )

        return HttpObservation(
            url=safe_url,
            status_code=response.status_code,
            elapsed=_elapsed(response),
            body=response.text,
            headers=dict(response.headers),
            certificates=peer_certificates(response),
        )


def peer_certificates(response: httpx.Response) -> Tuple[PeerCertificate, ...]:
    """Certificates presented by the server, leaf first; empty for plain HTTP."""
    stream = response.extensions.get("network_stream")
    if stream is None:
        return ()

    ssl_object = stream.get_extra_info("ssl_object")
    if ssl_object is None:
        return ()

    chain: List[bytes] = []
    get_chain = getattr(ssl_object, "get_unverified_chain", None)
    if get_chain is not None:
        chain = [entry for entry in get_chain() or () if isinstance(entry, bytes)]
    if not chain:
        leaf = ssl_object.getpeercert(binary_form=True)
        chain = [leaf] if leaf else []

    return tuple(_parse_certificates(chain))


def _parse_certificates(chain: Iterable[bytes]) -> Iterable[PeerCertificate]:
    for der in chain:
        certificate = x509.load_der_x509_certificate(der)
        yield PeerCertificate(
            subject=certificate.subject.rfc4514_string(),
            issuer=certificate.issuer.rfc4514_string(),
            not_after=certificate.not_valid_after_utc,
        )


def _elapsed(response: httpx.Response) -> timedelta:
    try:
        return response.elapsed
    except RuntimeError:
        return timedelta(0)
