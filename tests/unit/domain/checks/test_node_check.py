from __future__ import annotations

from datetime import timedelta

import pytest

from conftest import NOW, StubClusterGateway, fixed_clock
from kubecheck.domain.checks import (
    KubernetesNodeHealthcheck,
    expect_node_count,
    expect_node_count_max,
    expect_node_count_min,
    expect_node_count_range,
    expect_node_status_ok,
)
from kubecheck.domain.entities.cluster import ClusterNode, NodeCondition
from kubecheck.shared.consts import EnumCheckStatus

HEALTHY = (
    NodeCondition("Ready", "True"),
    NodeCondition("MemoryPressure", "False"),
    NodeCondition("DiskPressure", "False"),
)


def _nodes(count: int, age: timedelta = timedelta(hours=1), conditions=HEALTHY):
    return [
        ClusterNode(name=f"node-{index}", created_at=NOW - age, conditions=conditions)
        for index in range(count)
    ]


def _check(cluster: StubClusterGateway, *expectations) -> KubernetesNodeHealthcheck:
    return KubernetesNodeHealthcheck(
        name="kubernetes-node-health",
        cluster=cluster,
        clock=fixed_clock(),
    ).with_expectations(*expectations)


@pytest.mark.asyncio
@pytest.mark.parametrize("count, status", [(4, EnumCheckStatus.PASSED), (1, EnumCheckStatus.FAILED)])
async def test_node_count_range(count: int, status: EnumCheckStatus) -> None:
    result = await _check(StubClusterGateway(nodes=_nodes(count)), expect_node_count_range(2, 6)).execute()

    assertion = result.output[0].assertions[0]
    assert result.status is status
    assert (assertion.kind, assertion.expected, assertion.actual) == ("InRange", "min=2 max=6", count)


@pytest.mark.asyncio
async def test_node_count_equals_uses_equality() -> None:
    cluster = StubClusterGateway(nodes=_nodes(3))

    exact = await _check(cluster, expect_node_count(3)).execute()
    other = await _check(cluster, expect_node_count(2)).execute()

    assert exact.status is EnumCheckStatus.PASSED
    assert exact.output[0].assertions[0].kind == "Equals"
    assert other.status is EnumCheckStatus.FAILED


@pytest.mark.asyncio
async def test_node_count_single_bounds() -> None:
    cluster = StubClusterGateway(nodes=_nodes(3))

    at_least = await _check(cluster, expect_node_count_min(4)).execute()
    at_most = await _check(cluster, expect_node_count_max(3)).execute()

    assert at_least.output[0].assertions[0].expected == ">=4"
    assert at_least.status is EnumCheckStatus.FAILED
    assert at_most.output[0].assertions[0].expected == "<=3"
    assert at_most.status is EnumCheckStatus.PASSED


@pytest.mark.asyncio
async def test_node_status_flags_pressure_conditions() -> None:
    unhealthy = (NodeCondition("Ready", "True"), NodeCondition("DiskPressure", "True"))
    cluster = StubClusterGateway(nodes=_nodes(1) + _nodes(1, conditions=unhealthy))

    result = await _check(cluster, expect_node_status_ok(timedelta(minutes=10))).execute()

    healthy_group, unhealthy_group = result.output
    assert healthy_group.failed is False
    failed = [assertion for assertion in unhealthy_group.assertions if assertion.failed]
    assert [(a.kind, a.expected, a.actual) for a in failed] == [("DiskPressure", "False", "True")]
    assert result.status is EnumCheckStatus.FAILED


@pytest.mark.asyncio
async def test_new_nodes_are_within_grace_period() -> None:
    not_ready = (NodeCondition("Ready", "False"),)
    cluster = StubClusterGateway(
        nodes=_nodes(1, age=timedelta(minutes=2), conditions=not_ready)
    )

    result = await _check(cluster, expect_node_status_ok(timedelta(minutes=10))).execute()

    assert result.status is EnumCheckStatus.PASSED
    assert result.output == []


@pytest.mark.asyncio
async def test_api_failure_is_reported() -> None:
    cluster = StubClusterGateway(error="list nodes failed: 403 Forbidden")

    result = await _check(cluster, expect_node_count_min(1)).execute()

    assert result.status is EnumCheckStatus.FAILED
    assert result.reason == "list nodes failed: 403 Forbidden"
