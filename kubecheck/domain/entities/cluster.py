"""
Cluster domain entities.

Typed, read-only snapshots of the cluster resources the Kubernetes
healthchecks look at. Only the fields the expectations need are kept.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Optional, Tuple

CONDITION_TRUE = "True"
CONDITION_FALSE = "False"
NODE_READY = "Ready"


@dataclass(frozen=True, slots=True)
class NodeCondition:
    type: str
    status: str


@dataclass(frozen=True, slots=True)
class ClusterNode:
    name: str
    created_at: datetime
    conditions: Tuple[NodeCondition, ...] = ()


@dataclass(frozen=True, slots=True)
class PodCondition:
    type: str
    status: str


@dataclass(frozen=True, slots=True)
class ContainerStatus:
    name: str
    ready: bool
    restart_count: int = 0


@dataclass(frozen=True, slots=True)
class ClusterPod:
    name: str
    namespace: str
    created_at: datetime
    node_name: Optional[str] = None
    labels: Dict[str, str] = field(default_factory=dict)
    annotations: Dict[str, str] = field(default_factory=dict)
    conditions: Tuple[PodCondition, ...] = ()
    container_statuses: Tuple[ContainerStatus, ...] = ()


@dataclass(frozen=True, slots=True)
class ClusterDeployment:
    name: str
    namespace: str
    replicas: int


@dataclass(frozen=True, slots=True)
class DaemonSetStatus:
    current_number_scheduled: int = 0
    desired_number_scheduled: int = 0
    number_misscheduled: int = 0
    number_ready: int = 0
    number_available: int = 0
    number_unavailable: int = 0
    updated_number_scheduled: int = 0


@dataclass(frozen=True, slots=True)
class ClusterDaemonSet:
    name: str
    namespace: str
    created_at: datetime
    status: DaemonSetStatus = field(default_factory=DaemonSetStatus)


@dataclass(frozen=True, slots=True)
class ClusterService:
    name: str
    namespace: str
    created_at: datetime


@dataclass(frozen=True, slots=True)
class EndpointAddress:
    ip: str
    hostname: Optional[str] = None


@dataclass(frozen=True, slots=True)
class EndpointPort:
    name: Optional[str]
    port: int


@dataclass(frozen=True, slots=True)
class EndpointSubset:
    addresses: Tuple[EndpointAddress, ...] = ()
    ports: Tuple[EndpointPort, ...] = ()


@dataclass(frozen=True, slots=True)
class ClusterEndpoints:
    name: str
    namespace: str
    subsets: Tuple[EndpointSubset, ...] = ()
