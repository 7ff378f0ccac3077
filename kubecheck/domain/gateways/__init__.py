"""Domain gateways package."""

from .cluster_gateway import IClusterGateway

__all__ = ["IClusterGateway"]
