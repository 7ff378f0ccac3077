"""
Healthchecks Package - Domain Layer

Every healthcheck variant together with the expectations it accepts and the
``expect_*`` factories used to configure it.
"""

from .base import Expectation, Healthcheck
from .dns import DnsLookupHealthcheck, expect_addrs
from .http import (
    HttpGetHealthcheck,
    expect_body_contains,
    expect_body_equals,
    expect_header,
    expect_response_in,
    expect_status_code,
    expect_status_code_range,
    expect_status_code_success,
    expect_valid_certificate,
)
from .ingress_gateway import IngressGatewayConfig, IngressGatewayHealthcheck
from .kubernetes_node import (
    KubernetesNodeHealthcheck,
    expect_node_count,
    expect_node_count_max,
    expect_node_count_min,
    expect_node_count_range,
    expect_node_status_ok,
)
from .kubernetes_pod import (
    KubernetesPodConfig,
    KubernetesPodHealthcheck,
    expect_pod_max_container_restarts,
    expect_pod_status_ok,
)
from .kubernetes_pod_anti_affinity import (
    KubernetesPodAntiAffinityHealthcheck,
    expect_node_spread,
)
from .random_fail import RandomFailHealthcheck

__all__ = [
    "Expectation",
    "Healthcheck",
    "DnsLookupHealthcheck",
    "HttpGetHealthcheck",
    "IngressGatewayConfig",
    "IngressGatewayHealthcheck",
    "KubernetesNodeHealthcheck",
    "KubernetesPodConfig",
    "KubernetesPodHealthcheck",
    "KubernetesPodAntiAffinityHealthcheck",
    "RandomFailHealthcheck",
    "expect_addrs",
    "expect_body_contains",
    "expect_body_equals",
    "expect_header",
    "expect_response_in",
    "expect_status_code",
    "expect_status_code_range",
    "expect_status_code_success",
    "expect_valid_certificate",
    "expect_node_count",
    "expect_node_count_max",
    "expect_node_count_min",
    "expect_node_count_range",
    "expect_node_status_ok",
    "expect_pod_max_container_restarts",
    "expect_pod_status_ok",
    "expect_node_spread",
]
