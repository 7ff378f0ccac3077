"""Kubernetes pod healthcheck: pod conditions and container health."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any, ClassVar, Dict, List, Optional, Tuple

from kubecheck.domain.checks.base import Expectation, Healthcheck, is_past_grace_period
from kubecheck.domain.entities.assertion import AssertionGroup
from kubecheck.domain.entities.cluster import CONDITION_TRUE, ClusterPod
from kubecheck.domain.gateways.cluster_gateway import IClusterGateway


@dataclass(frozen=True)
class KubernetesPodConfig:
    namespace: Optional[str] = None
    created_grace_period: timedelta = timedelta(0)
    exclude_pods: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "namespace": self.namespace,
            "gracePeriod": str(self.created_grace_period),
            "excludePods": list(self.exclude_pods),
        }


@dataclass(frozen=True, slots=True)
class PodExpectationContext:
    config: KubernetesPodConfig
    pods: Tuple[ClusterPod, ...]
    now: datetime

    def eligible_pods(self) -> List[ClusterPod]:
        """Pods past the grace period whose name matches no excluded prefix."""
        return [pod for pod in self.pods if not self.is_excluded(pod)]

    def is_excluded(self, pod: ClusterPod) -> bool:
        if not is_past_grace_period(pod.created_at, self.config.created_grace_period, self.now):
            return True
        return any(pod.name.startswith(prefix) for prefix in self.config.exclude_pods)


class KubernetesPodExpectation(Expectation):
    """Expectation verified against a :class:`PodExpectationContext`."""


@dataclass(frozen=True, kw_only=True)
class KubernetesPodHealthcheck(Healthcheck):
    """Lists the pods of one namespace (every namespace when unset)."""

    kind: ClassVar[str] = "kubernetes-pod"
    accepted_expectations: ClassVar[Tuple[type, ...]] = (KubernetesPodExpectation,)

    description: str = "Performs pod healthchecks"
    config: KubernetesPodConfig = field(default_factory=KubernetesPodConfig)
    cluster: IClusterGateway

    def build_input(self) -> Dict[str, Any]:
        return self.config.to_dict()

    async def observe(self) -> List[ClusterPod]:
        return await self.cluster.list_pods(self.config.namespace)

    def build_context(self, observation: List[ClusterPod], now: datetime) -> PodExpectationContext:
        return PodExpectationContext(config=self.config, pods=tuple(observation), now=now)


def _pod_subject(pod: ClusterPod, **extra: Any) -> Dict[str, Any]:
    subject = dict(extra)
    subject.update(
        {
            "podName": pod.name,
            "namespace": pod.namespace,
            "created": pod.created_at,
            "labels": dict(pod.labels),
            "annotations": dict(pod.annotations),
        }
    )
    return subject


@dataclass(frozen=True)
class KubernetesPodStatusExpectation(KubernetesPodExpectation):
    """Every condition reported by an eligible pod is True."""

    def verify(self, context: PodExpectationContext) -> List[AssertionGroup]:
        groups = []
        for pod in context.eligible_pods():
            group = AssertionGroup("PodStatus", _pod_subject(pod))
            for condition in pod.conditions:
                group.record(
                    condition.type,
                    condition.status == CONDITION_TRUE,
                    CONDITION_TRUE,
                    condition.status,
                )
            groups.append(group)
        return groups


@dataclass(frozen=True)
class KubernetesPodContainerExpectation(KubernetesPodExpectation):
    """Containers are ready and restarted at most ``max_restarts`` times.

    A negative ``max_restarts`` disables the restart assertion.
    """

    max_restarts: int = -1

    def verify(self, context: PodExpectationContext) -> List[AssertionGroup]:
        groups = []
        for pod in context.eligible_pods():
            for container in pod.container_statuses:
                group = AssertionGroup(
                    "ContainerStatus",
                    _pod_subject(pod, containerName=container.name),
                )
                group.record("Ready", container.ready, True, container.ready)
                if self.max_restarts >= 0:
                    group.record(
                        "RestartCount",
                        container.restart_count <= self.max_restarts,
                        f"<={self.max_restarts}",
                        container.restart_count,
                    )
                groups.append(group)
        return groups


def expect_pod_status_ok() -> KubernetesPodStatusExpectation:
    return KubernetesPodStatusExpectation()


def expect_pod_max_container_restarts(max_restarts: int) -> KubernetesPodContainerExpectation:
    return KubernetesPodContainerExpectation(max_restarts=max_restarts)
