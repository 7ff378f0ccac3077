"""
Domain Entities Package

This package contains the core domain entities: the assertion model, the
healthcheck verdict and the typed observations the probes produce.
"""

from .assertion import Assertion, AssertionGroup
from .cluster import (
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
from .errors import (
    DuplicateHealthcheckError,
    ExpectationTypeError,
    HealthcheckNotFoundError,
    KubecheckError,
    ObservationError,
)
from .health import EXPECTATIONS_NOT_MET, Description, Result
from .http import HttpObservation, PeerCertificate, PingResult
from .lifecycle import LifecycleEvent, Webhook

__all__ = [
    "Assertion",
    "AssertionGroup",
    "ClusterDaemonSet",
    "ClusterDeployment",
    "ClusterEndpoints",
    "ClusterNode",
    "ClusterPod",
    "ClusterService",
    "ContainerStatus",
    "DaemonSetStatus",
    "EndpointAddress",
    "EndpointPort",
    "EndpointSubset",
    "NodeCondition",
    "PodCondition",
    "KubecheckError",
    "ObservationError",
    "ExpectationTypeError",
    "DuplicateHealthcheckError",
    "HealthcheckNotFoundError",
    "EXPECTATIONS_NOT_MET",
    "Description",
    "Result",
    "HttpObservation",
    "PeerCertificate",
    "PingResult",
    "LifecycleEvent",
    "Webhook",
]
