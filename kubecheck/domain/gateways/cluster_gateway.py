"""
Cluster Gateway Interface - Domain Layer

This module defines the interface for reading resources from the
cluster-management API.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from kubecheck.domain.entities.cluster import (
    ClusterDaemonSet,
    ClusterDeployment,
    ClusterEndpoints,
    ClusterNode,
    ClusterPod,
    ClusterService,
)


class IClusterGateway(ABC):
    """Interface for Cluster Gateway.

    Every call is read-only and independent of the others, so one instance
    is shared by all concurrently running healthchecks.
    """

    @abstractmethod
    async def list_nodes(self) -> List[ClusterNode]:
        """
        List the nodes of the cluster.

        Raises:
            ObservationError: If the cluster API call fails
        """
        pass

    @abstractmethod
    async def list_pods(self, namespace: Optional[str] = None) -> List[ClusterPod]:
        """
        List pods of a namespace, or of every namespace when ``namespace`` is None.

        Raises:
            ObservationError: If the cluster API call fails
        """
        pass

    @abstractmethod
    async def list_deployments(
        self, namespace: Optional[str] = None
    ) -> List[ClusterDeployment]:
        """List deployments of a namespace, or of every namespace."""
        pass

    @abstractmethod
    async def get_daemon_set(self, namespace: str, name: str) -> ClusterDaemonSet:
        """Read a single daemon set."""
        pass

    @abstractmethod
    async def get_service(self, namespace: str, name: str) -> ClusterService:
        """Read a single service."""
        pass

    @abstractmethod
    async def get_endpoints(self, namespace: str, name: str) -> ClusterEndpoints:
        """Read the endpoints backing a service."""
        pass
