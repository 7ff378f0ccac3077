"""
Healthcheck Catalog - Main Layer

Builds the list of healthchecks the service runs from the catalog settings
and the shared clients. Kubernetes healthchecks are only registered when
Kubernetes access is enabled.
"""

from datetime import timedelta
from typing import Callable, List, Optional, Sequence

from kubecheck.domain.checks import (
    DnsLookupHealthcheck,
    HttpGetHealthcheck,
    IngressGatewayConfig,
    IngressGatewayHealthcheck,
    KubernetesNodeHealthcheck,
    KubernetesPodAntiAffinityHealthcheck,
    KubernetesPodConfig,
    KubernetesPodHealthcheck,
    RandomFailHealthcheck,
    expect_body_contains,
    expect_header,
    expect_node_count_range,
    expect_node_spread,
    expect_node_status_ok,
    expect_pod_max_container_restarts,
    expect_pod_status_ok,
    expect_status_code,
    expect_valid_certificate,
)
from kubecheck.domain.checks.base import Healthcheck
from kubecheck.domain.entities.errors import DuplicateHealthcheckError
from kubecheck.domain.gateways.cluster_gateway import IClusterGateway
from kubecheck.domain.ports.http_client import IHttpClient
from kubecheck.domain.ports.random_source import IRandomSource
from kubecheck.domain.ports.resolver import IResolver
from kubecheck.shared import get_logger

from .config import ChecksSettings

logger = get_logger(__name__)


def configure_healthchecks(
    settings: ChecksSettings,
    http_client: IHttpClient,
    resolver: IResolver,
    random_source: IRandomSource,
    cluster_factory: Optional[Callable[[], IClusterGateway]] = None,
) -> List[Healthcheck]:
    """
    Build the healthcheck catalog.

    Args:
        settings: Catalog parameters
        http_client: Shared HTTP client
        resolver: Shared name resolver
        random_source: Source of the random failure draws
        cluster_factory: Returns the shared cluster gateway; None leaves the
            Kubernetes healthchecks out

    Raises:
        DuplicateHealthcheckError: If two healthchecks share a name
    """
    healthchecks: List[Healthcheck] = [
        RandomFailHealthcheck(
            name="random-failure",
            description=(
                "Randomly fails at the given failure rate. Usually used for "
                "debugging alarms. Failures may be ignored!"
            ),
            fail_rate=settings.random_fail_rate,
            random_source=random_source,
        ),
        HttpGetHealthcheck(
            name="http-get",
            description="Performs a HTTP GET request",
            url=settings.http_url,
            http_client=http_client,
        ).with_expectations(
            expect_status_code(200),
            expect_body_contains(settings.http_body_contains),
            expect_header("content-type", settings.http_content_type),
            expect_valid_certificate(settings.http_certificate_days),
        ),
        DnsLookupHealthcheck(
            name=f"dns-lookup-{settings.dns_host.replace('.', '-')}",
            description="Performs a DNS lookup to verify that domain names can be resolved",
            host=settings.dns_host,
            resolver=resolver,
        ),
    ]

    if cluster_factory is not None:
        cluster = cluster_factory()
        healthchecks.extend(_kubernetes_healthchecks(settings, cluster, http_client))

    ensure_unique_names(healthchecks)

    logger.info(
        "healthchecks.configured",
        count=len(healthchecks),
        names=[check.name for check in healthchecks],
    )
    return healthchecks


def _kubernetes_healthchecks(
    settings: ChecksSettings,
    cluster: IClusterGateway,
    http_client: IHttpClient,
) -> List[Healthcheck]:
    pod_config = KubernetesPodConfig(
        namespace=settings.pod_namespace,
        created_grace_period=timedelta(minutes=settings.pod_grace_period_minutes),
        exclude_pods=tuple(settings.pod_exclude),
    )

    return [
        KubernetesNodeHealthcheck(
            name="kubernetes-node-health",
            description="Performs kubernetes node healthchecks",
            cluster=cluster,
        ).with_expectations(
            expect_node_count_range(settings.node_count_min, settings.node_count_max),
            expect_node_status_ok(timedelta(minutes=settings.node_grace_period_minutes)),
        ),
        KubernetesPodHealthcheck(
            name="kubernetes-pod-health",
            config=pod_config,
            cluster=cluster,
        ).with_expectations(
            expect_pod_status_ok(),
            expect_pod_max_container_restarts(settings.pod_max_restarts),
        ),
        IngressGatewayHealthcheck.create(
            "kubernetes-ingress-gateway-health",
            IngressGatewayConfig(
                namespace=settings.ingress_namespace,
                daemon_set_name=settings.ingress_daemon_set,
                service_name=settings.ingress_service,
                service_port_name=settings.ingress_service_port,
            ),
            cluster,
            http_client,
        ),
        KubernetesPodAntiAffinityHealthcheck(
            name="kubernetes-pod-anti-affinity-health",
            description="Performs kubernetes pod anti-affinity healthchecks",
            cluster=cluster,
            exclude_namespaces=tuple(settings.anti_affinity_exclude_namespaces),
            exclude_deployments=tuple(settings.anti_affinity_exclude_deployments),
        ).with_expectations(expect_node_spread(settings.node_spread_min)),
    ]


def ensure_unique_names(healthchecks: Sequence[Healthcheck]) -> None:
    """Raise :class:`DuplicateHealthcheckError` for the first repeated name."""
    seen = set()
    for check in healthchecks:
        if check.name in seen:
            raise DuplicateHealthcheckError(check.name)
        seen.add(check.name)
