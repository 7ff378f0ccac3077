from __future__ import annotations

from datetime import timedelta

import pytest

from conftest import NOW, StubClusterGateway, fixed_clock
from kubecheck.domain.checks import (
    KubernetesPodConfig,
    KubernetesPodHealthcheck,
    expect_pod_max_container_restarts,
    expect_pod_status_ok,
)
from kubecheck.domain.entities.cluster import ClusterPod, ContainerStatus, PodCondition
from kubecheck.shared.consts import EnumCheckStatus


def _pod(name: str, *, ready: str = "True", restarts: int = 0, age=timedelta(hours=1), namespace="default"):
    return ClusterPod(
        name=name,
        namespace=namespace,
        created_at=NOW - age,
        node_name="node-1",
        labels={"app": name.split("-")[0]},
        conditions=(PodCondition("Ready", ready), PodCondition("PodScheduled", "True")),
        container_statuses=(ContainerStatus("app", ready == "True", restarts),),
    )


def _check(pods, config=KubernetesPodConfig(), *expectations) -> KubernetesPodHealthcheck:
    return KubernetesPodHealthcheck(
        name="kubernetes-pod-health",
        config=config,
        cluster=StubClusterGateway(pods=pods),
        clock=fixed_clock(),
    ).with_expectations(*expectations)


@pytest.mark.asyncio
async def test_pod_conditions_must_be_true() -> None:
    result = await _check(
        [_pod("api-1"), _pod("worker-1", ready="False")], KubernetesPodConfig(), expect_pod_status_ok()
    ).execute()

    api, worker = result.output
    assert api.failed is False
    assert worker.failed is True
    assert worker.subject["podName"] == "worker-1"
    assert worker.subject["labels"] == {"app": "worker"}
    assert result.status is EnumCheckStatus.FAILED


@pytest.mark.asyncio
async def test_restart_count_uses_configured_maximum() -> None:
    result = await _check(
        [_pod("api-1", restarts=7)], KubernetesPodConfig(), expect_pod_max_container_restarts(5)
    ).execute()

    group = result.output[0]
    assert group.subject["containerName"] == "app"
    restart = group.assertions[1]
    assert (restart.kind, restart.expected, restart.actual) == ("RestartCount", "<=5", 7)
    assert result.status is EnumCheckStatus.FAILED


@pytest.mark.asyncio
async def test_negative_maximum_only_checks_readiness() -> None:
    result = await _check(
        [_pod("api-1", restarts=50)], KubernetesPodConfig(), expect_pod_max_container_restarts(-1)
    ).execute()

    assert [assertion.kind for assertion in result.output[0].assertions] == ["Ready"]
    assert result.status is EnumCheckStatus.PASSED


@pytest.mark.asyncio
async def test_excluded_and_young_pods_are_skipped() -> None:
    config = KubernetesPodConfig(
        created_grace_period=timedelta(minutes=10),
        exclude_pods=("job-",),
    )
    pods = [
        _pod("job-123", ready="False"),
        _pod("api-1", ready="False", age=timedelta(minutes=1)),
    ]

    result = await _check(pods, config, expect_pod_status_ok()).execute()

    assert result.status is EnumCheckStatus.PASSED
    assert result.output == []
    assert result.input == {"namespace": None, "gracePeriod": "0:10:00", "excludePods": ["job-"]}


@pytest.mark.asyncio
async def test_namespace_is_passed_to_the_cluster() -> None:
    check = _check([_pod("api-1", namespace="shop")], KubernetesPodConfig(namespace="shop"))

    await check.execute()

    assert check.cluster.pod_namespaces == ["shop"]
