"""Kubernetes API adapters."""

from .cluster_gateway import KubernetesClusterGateway, load_kubernetes_config

__all__ = ["KubernetesClusterGateway", "load_kubernetes_config"]
