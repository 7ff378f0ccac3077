"""Kubernetes pod anti-affinity healthcheck: replicas spread over nodes."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from datetime import datetime
from typing import Any, ClassVar, Dict, List, Tuple

from kubecheck.domain.checks.base import Expectation, Healthcheck
from kubecheck.domain.entities.assertion import AssertionGroup
from kubecheck.domain.entities.cluster import ClusterDeployment, ClusterPod
from kubecheck.domain.gateways.cluster_gateway import IClusterGateway
from kubecheck.shared.logging import get_logger

logger = get_logger(__name__)

MIN_REPLICAS_FOR_SPREAD = 2


@dataclass(frozen=True, slots=True)
class PodAntiAffinityContext:
    deployments: Tuple[ClusterDeployment, ...]
    pods: Tuple[ClusterPod, ...]


@dataclass(frozen=True, slots=True)
class PodPlacement:
    name: str
    node_name: str


@dataclass(frozen=True, slots=True)
class DeploymentNodeSpread:
    """Diagnostic snapshot of where the pods of one deployment run."""

    description: str
    deployment: str
    namespace: str
    pods: Tuple[PodPlacement, ...]
    node_spread: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "description": self.description,
            "deployment": self.deployment,
            "namespace": self.namespace,
            "pods": [{"name": pod.name, "nodeName": pod.node_name} for pod in self.pods],
            "nodeSpread": self.node_spread,
        }


class KubernetesPodAntiAffinityExpectation(Expectation):
    """Expectation verified against a :class:`PodAntiAffinityContext`."""


@dataclass(frozen=True, kw_only=True)
class KubernetesPodAntiAffinityHealthcheck(Healthcheck):
    """Lists deployments and pods of every namespace."""

    kind: ClassVar[str] = "kubernetes-pod-anti-affinity"
    accepted_expectations: ClassVar[Tuple[type, ...]] = (
        KubernetesPodAntiAffinityExpectation,
    )

    cluster: IClusterGateway
    exclude_namespaces: Tuple[str, ...] = ()
    exclude_deployments: Tuple[str, ...] = ()

    def build_input(self) -> Dict[str, Any]:
        return {
            "excludeNamespaces": list(self.exclude_namespaces),
            "excludeDeployments": list(self.exclude_deployments),
        }

    async def observe(self) -> PodAntiAffinityContext:
        deployments, pods = await asyncio.gather(
            self.cluster.list_deployments(),
            self.cluster.list_pods(),
        )
        included = tuple(
            deployment
            for deployment in deployments
            if deployment.namespace not in self.exclude_namespaces
            and deployment.name not in self.exclude_deployments
        )
        return PodAntiAffinityContext(deployments=included, pods=tuple(pods))


def deployment_pods(deployment: ClusterDeployment, pods: Tuple[ClusterPod, ...]) -> List[ClusterPod]:
    """Pods named ``<deployment>-...`` living in the deployment's namespace."""
    prefix = f"{deployment.name}-"
    return [
        pod
        for pod in pods
        if pod.name.startswith(prefix) and pod.namespace == deployment.namespace
    ]


@dataclass(frozen=True)
class KubernetesNodeSpreadExpectation(KubernetesPodAntiAffinityExpectation):
    """Deployments with two or more replicas run on at least ``min`` nodes."""

    min: int

    def verify(self, context: PodAntiAffinityContext) -> List[AssertionGroup]:
        groups = []

        for deployment in context.deployments:
            if deployment.replicas < MIN_REPLICAS_FOR_SPREAD:
                continue

            log = logger.bind(
                namespace=deployment.namespace,
                deployment=deployment.name,
                replicas=deployment.replicas,
            )
            log.debug("node_spread.check")

            placements = tuple(
                PodPlacement(name=pod.name, node_name=pod.node_name or "")
                for pod in deployment_pods(deployment, context.pods)
            )
            nodes = {placement.node_name for placement in placements}

            spread = DeploymentNodeSpread(
                description=(
                    f"{len(placements)} pod(s) are spread across {len(nodes)} node(s)."
                ),
                deployment=deployment.name,
                namespace=deployment.namespace,
                pods=placements,
                node_spread=len(nodes),
            )

            group = AssertionGroup("NodeSpread", spread.to_dict())
            condition = spread.node_spread >= self.min
            group.record("Min", condition, self.min, spread.node_spread)

            if condition:
                log.debug("node_spread.success", detail=spread.description)
            else:
                log.debug("node_spread.failed", detail=spread.description)

            groups.append(group)

        return groups


def expect_node_spread(min_nodes: int) -> KubernetesNodeSpreadExpectation:
    return KubernetesNodeSpreadExpectation(min=min_nodes)
