from __future__ import annotations

import pytest

from conftest import NOW, StubClusterGateway
from kubecheck.domain.checks import KubernetesPodAntiAffinityHealthcheck, expect_node_spread
from kubecheck.domain.entities.cluster import ClusterDeployment, ClusterPod
from kubecheck.shared.consts import EnumCheckStatus


def _pod(name: str, node: str, namespace: str = "default") -> ClusterPod:
    return ClusterPod(name=name, namespace=namespace, created_at=NOW, node_name=node)


def _check(cluster: StubClusterGateway, **kwargs) -> KubernetesPodAntiAffinityHealthcheck:
    return KubernetesPodAntiAffinityHealthcheck(
        name="kubernetes-pod-anti-affinity-health",
        cluster=cluster,
        **kwargs,
    ).with_expectations(expect_node_spread(2))


@pytest.mark.asyncio
async def test_replicas_on_two_nodes_pass() -> None:
    cluster = StubClusterGateway(
        deployments=[ClusterDeployment("api", "default", replicas=3)],
        pods=[
            _pod("api-6b9f-a", "node-1"),
            _pod("api-6b9f-b", "node-1"),
            _pod("api-6b9f-c", "node-2"),
            _pod("api-6b9f-d", "node-3", namespace="other"),
        ],
    )

    result = await _check(cluster).execute()

    group = result.output[0]
    assert result.status is EnumCheckStatus.PASSED
    assert group.subject["nodeSpread"] == 2
    assert group.subject["description"] == "3 pod(s) are spread across 2 node(s)."
    assert group.assertions[0].kind == "Min"


@pytest.mark.asyncio
async def test_replicas_on_one_node_fail() -> None:
    cluster = StubClusterGateway(
        deployments=[ClusterDeployment("api", "default", replicas=2)],
        pods=[_pod("api-1", "node-1"), _pod("api-2", "node-1")],
    )

    result = await _check(cluster).execute()

    assertion = result.output[0].assertions[0]
    assert result.status is EnumCheckStatus.FAILED
    assert (assertion.expected, assertion.actual) == (2, 1)


@pytest.mark.asyncio
async def test_single_replica_deployments_are_skipped() -> None:
    cluster = StubClusterGateway(
        deployments=[ClusterDeployment("cron", "default", replicas=1)],
        pods=[_pod("cron-1", "node-1")],
    )

    result = await _check(cluster).execute()

    assert result.status is EnumCheckStatus.PASSED
    assert result.output == []


@pytest.mark.asyncio
async def test_excluded_namespaces_and_deployments() -> None:
    cluster = StubClusterGateway(
        deployments=[
            ClusterDeployment("coredns", "kube-system", replicas=2),
            ClusterDeployment("legacy", "default", replicas=2),
        ],
        pods=[_pod("coredns-1", "node-1", "kube-system"), _pod("legacy-1", "node-1")],
    )

    result = await _check(
        cluster, exclude_namespaces=("kube-system",), exclude_deployments=("legacy",)
    ).execute()

    assert result.output == []
    assert result.input == {"excludeNamespaces": ["kube-system"], "excludeDeployments": ["legacy"]}
