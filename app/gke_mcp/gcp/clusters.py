"""
GKE cluster API calls.
"""

import asyncio

from google.api_core import exceptions as google_exceptions
from google.auth.exceptions import DefaultCredentialsError
from google.cloud import container_v1

from gke_mcp.gcp.clients import GCPClients
from gke_mcp.kubeconfig import (
    ClusterEndpoint,
    ClusterIdentity,
    ClusterResolutionError,
)
from gke_mcp.utils import get_logger

logger = get_logger(__name__)

ALL_LOCATIONS = "-"


async def list_clusters(clients: GCPClients, project_id: str, location: str) -> str:
    """
    List clusters in a project.

    Args:
        clients: API clients
        project_id: GCP project ID
        location: Region or zone, or "-" for all locations

    Returns:
        ListClustersResponse as JSON
    """
    parent = f"projects/{project_id}/locations/{location or ALL_LOCATIONS}"
    logger.info(f"Listing clusters in {parent}")
    response = await asyncio.to_thread(
        clients.cluster_manager.list_clusters, parent=parent
    )
    return container_v1.ListClustersResponse.to_json(response)


async def get_cluster(clients: GCPClients, identity: ClusterIdentity) -> str:
    """
    Describe a cluster.

    Returns:
        Cluster as JSON
    """
    logger.info(f"Getting cluster {identity}")
    cluster = await asyncio.to_thread(
        clients.cluster_manager.get_cluster, name=identity.resource_name
    )
    return container_v1.Cluster.to_json(cluster)


class GKEEndpointResolver:
    """Resolves cluster endpoints through the GKE API."""

    def __init__(self, clients: GCPClients):
        self.clients = clients

    async def describe_endpoint(self, identity: ClusterIdentity) -> ClusterEndpoint:
        """
        Get the API server endpoint and CA certificate of a cluster.

        Raises:
            ClusterResolutionError: If the GKE API call fails
        """
        try:
            cluster = await asyncio.to_thread(
                self.clients.cluster_manager.get_cluster,
                name=identity.resource_name,
            )
        except (google_exceptions.GoogleAPIError, DefaultCredentialsError) as e:
            raise ClusterResolutionError(
                f"failed to get cluster {identity.name}: {e}", identity=identity
            ) from e

        return ClusterEndpoint(
            endpoint=cluster.endpoint,
            ca_certificate=cluster.master_auth.cluster_ca_certificate,
        )
