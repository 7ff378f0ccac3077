"""Kubernetes API implementation of the cluster gateway."""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone
from typing import Any, Callable, List, Optional, Tuple

from kubernetes import client, config
from kubernetes.client.rest import ApiException
from urllib3.exceptions import HTTPError as Urllib3HTTPError

from kubecheck.domain.entities.cluster import (
    ClusterDaemonSet,
    ClusterDeployment,
    ClusterEndpoints,
    ClusterNode,
    ClusterPod,
    ClusterService,
    ContainerStatus,
    DaemonSetStatus,
    EndpointAddress,
    EndpointPort,
    EndpointSubset,
    NodeCondition,
    PodCondition,
)
from kubecheck.domain.entities.errors import ObservationError
from kubecheck.domain.gateways.cluster_gateway import IClusterGateway
from kubecheck.shared import get_logger

logger = get_logger(__name__)

EPOCH = datetime.fromtimestamp(0, tz=timezone.utc)

DEFAULT_REQUEST_TIMEOUT_SECONDS = 8.0


class KubernetesClusterGateway(IClusterGateway):
    """Reads cluster state through the official Kubernetes client.

    The client is synchronous, so each API call runs in a worker thread and
    carries a ``_request_timeout`` that bounds how long that thread can block.
    """

    def __init__(
        self,
        in_cluster_config: bool = True,
        kubeconfig_path: Optional[str] = None,
        core_v1: Optional[Any] = None,
        apps_v1: Optional[Any] = None,
        request_timeout: float = DEFAULT_REQUEST_TIMEOUT_SECONDS,
    ) -> None:
        self._request_timeout = request_timeout

        if core_v1 is None or apps_v1 is None:
            load_kubernetes_config(in_cluster_config, kubeconfig_path)

        self._core_v1 = core_v1 or client.CoreV1Api()
        self._apps_v1 = apps_v1 or client.AppsV1Api()

    async def list_nodes(self) -> List[ClusterNode]:
        nodes = await self._call("list nodes", self._core_v1.list_node)
        return [_to_node(node) for node in nodes.items]

    async def list_pods(self, namespace: Optional[str] = None) -> List[ClusterPod]:
        if namespace:
            pods = await self._call(
                "list pods", self._core_v1.list_namespaced_pod, namespace=namespace
            )
        else:
            pods = await self._call("list pods", self._core_v1.list_pod_for_all_namespaces)
        return [_to_pod(pod) for pod in pods.items]

    async def list_deployments(self, namespace: Optional[str] = None) -> List[ClusterDeployment]:
        if namespace:
            deployments = await self._call(
                "list deployments",
                self._apps_v1.list_namespaced_deployment,
                namespace=namespace,
            )
        else:
            deployments = await self._call(
                "list deployments", self._apps_v1.list_deployment_for_all_namespaces
            )
        return [_to_deployment(deployment) for deployment in deployments.items]

    async def get_daemon_set(self, namespace: str, name: str) -> ClusterDaemonSet:
        daemon_set = await self._call(
            f"get daemonset {namespace}/{name}",
            self._apps_v1.read_namespaced_daemon_set,
            name=name,
            namespace=namespace,
        )
        return _to_daemon_set(daemon_set)

    async def get_service(self, namespace: str, name: str) -> ClusterService:
        service = await self._call(
            f"get service {namespace}/{name}",
            self._core_v1.read_namespaced_service,
            name=name,
            namespace=namespace,
        )
        return ClusterService(
            name=service.metadata.name,
            namespace=service.metadata.namespace,
            created_at=_created_at(service.metadata),
        )

    async def get_endpoints(self, namespace: str, name: str) -> ClusterEndpoints:
        endpoints = await self._call(
            f"get endpoints {namespace}/{name}",
            self._core_v1.read_namespaced_endpoints,
            name=name,
            namespace=namespace,
        )
        return _to_endpoints(endpoints)

    async def _call(self, operation: str, fn: Callable[..., Any], **kwargs: Any) -> Any:
        try:
            return await asyncio.to_thread(fn, _request_timeout=self._request_timeout, **kwargs)
        except ApiException as exc:
            logger.debug(
                "kubernetes.api.error",
                operation=operation,
                status=exc.status,
                reason=exc.reason,
            )
            raise ObservationError(
                f"{operation} failed: {exc.status} {exc.reason}",
                details={"status": exc.status},
            ) from exc
        except (Urllib3HTTPError, OSError) as exc:
            logger.debug("kubernetes.connection.error", operation=operation, error=str(exc))
            raise ObservationError(f"{operation} failed: {exc}") from exc


def load_kubernetes_config(in_cluster_config: bool, kubeconfig_path: Optional[str]) -> None:
    """Load in-cluster credentials, falling back to a kubeconfig file."""
    if in_cluster_config and not kubeconfig_path:
        try:
            config.load_incluster_config()
            logger.info("kubernetes.config.loaded", source="in-cluster")
            return
        except config.ConfigException:
            logger.warning("kubernetes.config.in_cluster.unavailable")

    config.load_kube_config(config_file=kubeconfig_path)
    logger.info("kubernetes.config.loaded", source=kubeconfig_path or "default kubeconfig")


def _created_at(metadata: Any) -> datetime:
    return metadata.creation_timestamp or EPOCH


def _to_node(node: Any) -> ClusterNode:
    conditions = node.status.conditions if node.status else None
    return ClusterNode(
        name=node.metadata.name,
        created_at=_created_at(node.metadata),
        conditions=tuple(
            NodeCondition(type=condition.type, status=condition.status)
            for condition in conditions or ()
        ),
    )


def _to_pod(pod: Any) -> ClusterPod:
    status = pod.status
    return ClusterPod(
        name=pod.metadata.name,
        namespace=pod.metadata.namespace,
        created_at=_created_at(pod.metadata),
        node_name=pod.spec.node_name if pod.spec else None,
        labels=dict(pod.metadata.labels or {}),
        annotations=dict(pod.metadata.annotations or {}),
        conditions=tuple(
            PodCondition(type=condition.type, status=condition.status)
            for condition in (status.conditions if status else None) or ()
        ),
        container_statuses=tuple(
            ContainerStatus(
                name=container.name,
                ready=bool(container.ready),
                restart_count=container.restart_count or 0,
            )
            for container in (status.container_statuses if status else None) or ()
        ),
    )


def _to_deployment(deployment: Any) -> ClusterDeployment:
    replicas = deployment.spec.replicas if deployment.spec else None
    return ClusterDeployment(
        name=deployment.metadata.name,
        namespace=deployment.metadata.namespace,
        replicas=1 if replicas is None else replicas,
    )


def _to_daemon_set(daemon_set: Any) -> ClusterDaemonSet:
    status = daemon_set.status
    return ClusterDaemonSet(
        name=daemon_set.metadata.name,
        namespace=daemon_set.metadata.namespace,
        created_at=_created_at(daemon_set.metadata),
        status=DaemonSetStatus(
            current_number_scheduled=status.current_number_scheduled or 0,
            desired_number_scheduled=status.desired_number_scheduled or 0,
            number_misscheduled=status.number_misscheduled or 0,
            number_ready=status.number_ready or 0,
            number_available=status.number_available or 0,
            number_unavailable=status.number_unavailable or 0,
            updated_number_scheduled=status.updated_number_scheduled or 0,
        )
        if status
        else DaemonSetStatus(),
    )


def _to_endpoints(endpoints: Any) -> ClusterEndpoints:
    subsets: Tuple[EndpointSubset, ...] = tuple(
        EndpointSubset(
            addresses=tuple(
                EndpointAddress(ip=address.ip, hostname=address.hostname)
                for address in subset.addresses or ()
            ),
            ports=tuple(
                EndpointPort(name=port.name, port=port.port) for port in subset.ports or ()
            ),
        )
        for subset in endpoints.subsets or ()
    )
    return ClusterEndpoints(
        name=endpoints.metadata.name,
        namespace=endpoints.metadata.namespace,
        subsets=subsets,
    )
