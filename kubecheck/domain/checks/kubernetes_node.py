"""Kubernetes node healthcheck: node count and node conditions."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import ClassVar, List, Optional, Tuple

from kubecheck.domain.checks.base import Expectation, Healthcheck, is_past_grace_period
from kubecheck.domain.entities.assertion import AssertionGroup
from kubecheck.domain.entities.cluster import (
    CONDITION_FALSE,
    CONDITION_TRUE,
    NODE_READY,
    ClusterNode,
)
from kubecheck.domain.gateways.cluster_gateway import IClusterGateway


@dataclass(frozen=True, slots=True)
class NodeExpectationContext:
    nodes: Tuple[ClusterNode, ...]
    now: datetime


class KubernetesNodeExpectation(Expectation):
    """Expectation verified against a :class:`NodeExpectationContext`."""


@dataclass(frozen=True, kw_only=True)
class KubernetesNodeHealthcheck(Healthcheck):
    """Lists the cluster nodes."""

    kind: ClassVar[str] = "kubernetes-node"
    accepted_expectations: ClassVar[Tuple[type, ...]] = (KubernetesNodeExpectation,)

    cluster: IClusterGateway

    async def observe(self) -> List[ClusterNode]:
        return await self.cluster.list_nodes()

    def build_context(self, observation: List[ClusterNode], now: datetime) -> NodeExpectationContext:
        return NodeExpectationContext(nodes=tuple(observation), now=now)


@dataclass(frozen=True)
class KubernetesNodeCountExpectation(KubernetesNodeExpectation):
    """Bounds on the node count; ``None`` leaves a side open."""

    min: Optional[int] = None
    max: Optional[int] = None

    def verify(self, context: NodeExpectationContext) -> List[AssertionGroup]:
        group = AssertionGroup("NodeCount")
        count = len(context.nodes)

        if self.min is not None and self.min == self.max:
            group.record("Equals", count == self.min, self.min, count)
        elif self.max is None:
            group.record("Min", count >= (self.min or 0), f">={self.min or 0}", count)
        elif self.min is None:
            group.record("Max", count <= self.max, f"<={self.max}", count)
        else:
            group.record(
                "InRange",
                self.min <= count <= self.max,
                f"min={self.min} max={self.max}",
                count,
            )

        return [group]


@dataclass(frozen=True)
class KubernetesNodeStatusExpectation(KubernetesNodeExpectation):
    """Every node past its grace period is Ready and reports no other condition."""

    created_grace_period: timedelta = timedelta(0)

    def verify(self, context: NodeExpectationContext) -> List[AssertionGroup]:
        groups = []

        for node in context.nodes:
            if not is_past_grace_period(node.created_at, self.created_grace_period, context.now):
                continue

            group = AssertionGroup("NodeStatus", node.name)
            for condition in node.conditions:
                if condition.type == NODE_READY:
                    group.record(
                        condition.type,
                        condition.status == CONDITION_TRUE,
                        CONDITION_TRUE,
                        condition.status,
                    )
                else:
                    group.record(
                        condition.type,
                        condition.status == CONDITION_FALSE,
                        CONDITION_FALSE,
                        condition.status,
                    )
            groups.append(group)

        return groups


def expect_node_count(expected: int) -> KubernetesNodeCountExpectation:
    return KubernetesNodeCountExpectation(min=expected, max=expected)


def expect_node_count_range(min_count: int, max_count: int) -> KubernetesNodeCountExpectation:
    return KubernetesNodeCountExpectation(min=min_count, max=max_count)


def expect_node_count_min(min_count: int) -> KubernetesNodeCountExpectation:
    return KubernetesNodeCountExpectation(min=min_count)


def expect_node_count_max(max_count: int) -> KubernetesNodeCountExpectation:
    return KubernetesNodeCountExpectation(max=max_count)


def expect_node_status_ok(grace_period: timedelta) -> KubernetesNodeStatusExpectation:
    return KubernetesNodeStatusExpectation(created_grace_period=grace_period)
