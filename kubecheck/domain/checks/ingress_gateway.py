"""
Ingress gateway healthcheck.

Looks at the daemon set running the ingress gateway, the service in front of
it and the endpoints backing that service, then pings every endpoint
directly. All network calls happen while observing; the expectations only
read the collected snapshot.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, ClassVar, Dict, List, Optional, Tuple

from kubecheck.domain.checks.base import (
    Expectation,
    Healthcheck,
    format_duration,
    is_past_grace_period,
)
from kubecheck.domain.entities.assertion import AssertionGroup
from kubecheck.domain.entities.cluster import (
    ClusterDaemonSet,
    ClusterEndpoints,
    ClusterService,
)
from kubecheck.domain.entities.errors import ObservationError
from kubecheck.domain.entities.http import PingResult
from kubecheck.domain.gateways.cluster_gateway import IClusterGateway
from kubecheck.domain.ports.http_client import IHttpClient
from kubecheck.shared.logging import get_logger
from kubecheck.shared.urls import url_host

logger = get_logger(__name__)

DEFAULT_GRACE_PERIOD = timedelta(minutes=10)


@dataclass(frozen=True)
class IngressGatewayConfig:
    namespace: str
    daemon_set_name: str
    service_name: str
    service_port_name: str
    grace_period: timedelta = DEFAULT_GRACE_PERIOD
    min_replicas: int = 2
    min_healthy_pings: int = 2
    max_average_ping: timedelta = timedelta(milliseconds=100)
    ping_path: str = "/ping"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "namespace": self.namespace,
            "daemonsetName": self.daemon_set_name,
            "serviceName": self.service_name,
            "servicePort": self.service_port_name,
            "gracePeriod": str(self.grace_period),
        }


@dataclass(frozen=True, slots=True)
class EndpointTarget:
    host: str
    port: int
    url: str


@dataclass(frozen=True, slots=True)
class IngressGatewayObservation:
    daemon_set: ClusterDaemonSet
    service: ClusterService
    endpoints: ClusterEndpoints
    pings: Tuple[PingResult, ...]


@dataclass(frozen=True, slots=True)
class IngressGatewayContext:
    config: IngressGatewayConfig
    daemon_set: ClusterDaemonSet
    service: ClusterService
    endpoints: ClusterEndpoints
    pings: Tuple[PingResult, ...]
    now: datetime


class IngressGatewayExpectation(Expectation):
    """Expectation verified against an :class:`IngressGatewayContext`."""


def endpoint_targets(
    config: IngressGatewayConfig, endpoints: ClusterEndpoints
) -> List[EndpointTarget]:
    """Every address exposing the configured service port, with its base URL."""
    targets: List[EndpointTarget] = []

    for subset in endpoints.subsets:
        port: Optional[int] = next(
            (p.port for p in subset.ports if p.name == config.service_port_name),
            None,
        )

        if not port:
            logger.error(
                "ingress_gateway.service_port.missing",
                service_port=config.service_port_name,
                addresses=[
                    {"ip": address.ip, "hostname": address.hostname}
                    for address in subset.addresses
                ],
            )
            continue

        scheme = "http"
        if port == 443 or config.service_port_name.startswith("https"):
            scheme = "https"

        targets.extend(
            EndpointTarget(
                host=address.ip,
                port=port,
                url=f"{scheme}://{url_host(address.ip)}:{port}",
            )
            for address in subset.addresses
        )

    return targets


@dataclass(frozen=True, kw_only=True)
class IngressGatewayHealthcheck(Healthcheck):
    """Checks the ingress gateway daemon set and pings its endpoints."""

    kind: ClassVar[str] = "ingress-gateway"
    accepted_expectations: ClassVar[Tuple[type, ...]] = (IngressGatewayExpectation,)

    description: str = "Performs ingress gateway healthchecks"
    timeout_seconds: float = 30.0
    config: IngressGatewayConfig
    cluster: IClusterGateway
    http_client: IHttpClient

    @classmethod
    def create(
        cls,
        name: str,
        config: IngressGatewayConfig,
        cluster: IClusterGateway,
        http_client: IHttpClient,
        **kwargs: Any,
    ) -> "IngressGatewayHealthcheck":
        """Build the check with its daemon set and endpoint expectations attached."""
        return cls(
            name=name,
            config=config,
            cluster=cluster,
            http_client=http_client,
            expectations=(DaemonSetExpectation(), ServiceEndpointExpectation()),
            **kwargs,
        )

    def build_input(self) -> Dict[str, Any]:
        return self.config.to_dict()

    async def observe(self) -> IngressGatewayObservation:
        config = self.config
        daemon_set = await self.cluster.get_daemon_set(config.namespace, config.daemon_set_name)
        service = await self.cluster.get_service(config.namespace, config.service_name)
        endpoints = await self.cluster.get_endpoints(config.namespace, config.service_name)

        pings: Tuple[PingResult, ...] = ()
        if is_past_grace_period(service.created_at, config.grace_period, self.clock()):
            targets = endpoint_targets(config, endpoints)
            pings = tuple(await asyncio.gather(*(self._ping(target) for target in targets)))

        return IngressGatewayObservation(
            daemon_set=daemon_set,
            service=service,
            endpoints=endpoints,
            pings=pings,
        )

    async def _ping(self, target: EndpointTarget) -> PingResult:
        try:
            response = await self.http_client.get(f"{target.url}{self.config.ping_path}")
        except ObservationError as exc:
            return PingResult(
                host=target.host,
                port=target.port,
                url=target.url,
                status_code=0,
                elapsed=timedelta(0),
                error=str(exc),
            )
        return PingResult(
            host=target.host,
            port=target.port,
            url=target.url,
            status_code=response.status_code,
            elapsed=response.elapsed,
        )

    def build_context(self, observation: IngressGatewayObservation, now: datetime) -> IngressGatewayContext:
        return IngressGatewayContext(
            config=self.config,
            daemon_set=observation.daemon_set,
            service=observation.service,
            endpoints=observation.endpoints,
            pings=observation.pings,
            now=now,
        )


@dataclass(frozen=True)
class DaemonSetExpectation(IngressGatewayExpectation):
    """The daemon set is fully rolled out on at least ``min_replicas`` nodes."""

    def verify(self, context: IngressGatewayContext) -> List[AssertionGroup]:
        daemon_set = context.daemon_set
        group = AssertionGroup("DaemonSet", daemon_set.name)

        if not is_past_grace_period(daemon_set.created_at, context.config.grace_period, context.now):
            return [group]

        status = daemon_set.status
        floor = context.config.min_replicas
        desired = status.desired_number_scheduled

        group.record(
            "CurrentNumberScheduled",
            status.current_number_scheduled == desired,
            desired,
            status.current_number_scheduled,
        )
        group.record("NumberMisscheduled", status.number_misscheduled == 0, 0, status.number_misscheduled)
        group.record("DesiredNumberScheduled", desired >= floor, f">={floor}", desired)
        group.record("NumberReady", status.number_ready >= floor, f">={floor}", status.number_ready)
        group.record(
            "NumberAvailable",
            status.number_available >= floor,
            f">={floor}",
            status.number_available,
        )
        group.record("NumberUnavailable", status.number_unavailable == 0, 0, status.number_unavailable)
        group.record(
            "UpdatedNumberScheduled",
            status.updated_number_scheduled == desired,
            desired,
            status.updated_number_scheduled,
        )

        return [group]


@dataclass(frozen=True)
class ServiceEndpointExpectation(IngressGatewayExpectation):
    """Enough endpoints answer their ping, and answer quickly on average."""

    def verify(self, context: IngressGatewayContext) -> List[AssertionGroup]:
        config = context.config
        group = AssertionGroup("ServiceEndpoints", context.service.name)

        if not is_past_grace_period(context.service.created_at, config.grace_period, context.now):
            return [group]

        healthy = 0
        total_elapsed = timedelta(0)

        for ping in context.pings:
            if ping.ok:
                healthy += 1
                total_elapsed += ping.elapsed

            group.record(f"PingOK_{url_host(ping.host)}:{ping.port}", ping.ok, 200, ping.status_code)

        group.record(
            "Reachable",
            healthy >= config.min_healthy_pings,
            f">={config.min_healthy_pings}",
            healthy,
        )

        if healthy > 0 and total_elapsed > timedelta(0):
            average = total_elapsed / healthy
            group.record(
                "PingAverageResponseTime",
                average <= config.max_average_ping,
                f"<={format_duration(config.max_average_ping)}",
                format_duration(average),
            )

        return [group]
