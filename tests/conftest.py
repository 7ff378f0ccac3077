from __future__ import annotations

import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Dict, List, Optional, Sequence

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from kubecheck.domain.entities.cluster import (  # noqa: E402
    ClusterDaemonSet,
    ClusterDeployment,
    ClusterEndpoints,
    ClusterNode,
    ClusterPod,
    ClusterService,
)
from kubecheck.domain.entities.errors import ObservationError  # noqa: E402
from kubecheck.domain.entities.http import HttpObservation  # noqa: E402
from kubecheck.domain.entities.lifecycle import LifecycleEvent  # noqa: E402

NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


class StubHttpClient:
    """Answers GETs from a url -> observation map; unknown URLs fail to connect."""

    def __init__(self, responses: Optional[Dict[str, HttpObservation]] = None) -> None:
        self.responses = dict(responses or {})
        self.requests: List[str] = []
        self.posts: List[tuple] = []

    async def get(self, url: str) -> HttpObservation:
        self.requests.append(url)
        if url not in self.responses:
            raise ObservationError(f"GET {url} failed: connection refused")
        return self.responses[url]

    async def post(self, url: str, data: str = "") -> HttpObservation:
        self.posts.append((url, data))
        return HttpObservation(url=url, status_code=200, elapsed=timedelta(milliseconds=5))


class StubClusterGateway:
    """In-memory cluster; ``error`` makes every call fail."""

    def __init__(
        self,
        nodes: Sequence[ClusterNode] = (),
        pods: Sequence[ClusterPod] = (),
        deployments: Sequence[ClusterDeployment] = (),
        daemon_set: Optional[ClusterDaemonSet] = None,
        service: Optional[ClusterService] = None,
        endpoints: Optional[ClusterEndpoints] = None,
        error: Optional[str] = None,
    ) -> None:
        self.nodes = list(nodes)
        self.pods = list(pods)
        self.deployments = list(deployments)
        self.daemon_set = daemon_set
        self.service = service
        self.endpoints = endpoints
        self.error = error
        self.pod_namespaces: List[Optional[str]] = []

    def _check(self) -> None:
        if self.error:
            raise ObservationError(self.error)

    async def list_nodes(self) -> List[ClusterNode]:
        self._check()
        return self.nodes

    async def list_pods(self, namespace: Optional[str] = None) -> List[ClusterPod]:
        self._check()
        self.pod_namespaces.append(namespace)
        return [pod for pod in self.pods if namespace is None or pod.namespace == namespace]

    async def list_deployments(self, namespace: Optional[str] = None) -> List[ClusterDeployment]:
        self._check()
        return self.deployments

    async def get_daemon_set(self, namespace: str, name: str) -> ClusterDaemonSet:
        self._check()
        return self.daemon_set

    async def get_service(self, namespace: str, name: str) -> ClusterService:
        self._check()
        return self.service

    async def get_endpoints(self, namespace: str, name: str) -> ClusterEndpoints:
        self._check()
        return self.endpoints


class StubResolver:
    def __init__(self, addresses: Optional[Dict[str, List[str]]] = None) -> None:
        self.addresses = addresses or {}

    async def resolve(self, host: str) -> List[str]:
        if host not in self.addresses:
            raise ObservationError(f"lookup {host} failed: no such host")
        return self.addresses[host]


class FixedRandom:
    def __init__(self, value: int) -> None:
        self.value = value
        self.calls: List[tuple] = []

    def randint(self, a: int, b: int) -> int:
        self.calls.append((a, b))
        return self.value


class RecordingNotifier:
    def __init__(self) -> None:
        self.events: List[LifecycleEvent] = []

    async def notify(self, event: LifecycleEvent) -> None:
        self.events.append(event)


def fixed_clock(now: datetime = NOW):
    return lambda: now


def http_observation(
    status_code: int = 200,
    body: str = "",
    headers: Optional[Dict[str, str]] = None,
    elapsed_ms: int = 20,
    url: str = "https://www.google.com/",
    certificates: tuple = (),
) -> HttpObservation:
    return HttpObservation(
        url=url,
        status_code=status_code,
        elapsed=timedelta(milliseconds=elapsed_ms),
        body=body,
        headers=headers or {},
        certificates=certificates,
    )


@pytest.fixture()
def now() -> datetime:
    return NOW


@pytest.fixture()
def recording_notifier() -> RecordingNotifier:
    return RecordingNotifier()
