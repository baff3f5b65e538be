"""
Google Cloud API clients.

Clients are created on first use so that the server can start (and serve
tools that do not need them) without Application Default Credentials.
"""

import asyncio
from typing import Optional

import google.auth
from google.api_core import exceptions as google_exceptions
from google.api_core.gapic_v1.client_info import ClientInfo
from google.auth.exceptions import DefaultCredentialsError
from google.cloud import container_v1
from google.cloud import logging as cloud_logging
from google.cloud import recommender_v1

from gke_mcp.config import GCPSettings
from gke_mcp.utils import get_logger

logger = get_logger(__name__)

ADC_INSTRUCTIONS = (
    "GKE API calls requires Application Default Credentials "
    "(https://cloud.google.com/docs/authentication/application-default-credentials). "
    "Get credentials with `gcloud auth application-default login` before calling MCP tools."
)


class GCPClients:
    """Lazily created Google Cloud API clients sharing one user agent."""

    def __init__(self, user_agent: str):
        self.client_info = ClientInfo(user_agent=user_agent)
        self._cluster_manager: Optional[container_v1.ClusterManagerClient] = None
        self._recommender: Optional[recommender_v1.RecommenderClient] = None
        self._logging: dict[str, cloud_logging.Client] = {}

    @property
    def cluster_manager(self) -> container_v1.ClusterManagerClient:
        if self._cluster_manager is None:
            self._cluster_manager = container_v1.ClusterManagerClient(
                client_info=self.client_info
            )
        return self._cluster_manager

    @property
    def recommender(self) -> recommender_v1.RecommenderClient:
        if self._recommender is None:
            self._recommender = recommender_v1.RecommenderClient(
                client_info=self.client_info
            )
        return self._recommender

    def logging(self, project_id: str) -> cloud_logging.Client:
        """Get the Cloud Logging client for a project."""
        if project_id not in self._logging:
            self._logging[project_id] = cloud_logging.Client(
                project=project_id, client_info=self.client_info
            )
        return self._logging[project_id]

    def close(self) -> None:
        """Close the gRPC channels of any created clients."""
        for client in (self._cluster_manager, self._recommender):
            if client is not None:
                client.transport.close()
        self._cluster_manager = None
        self._recommender = None
        self._logging.clear()


def resolve_default_project(settings: GCPSettings) -> str:
    """
    Resolve the project used when a tool call omits project_id.

    Uses the configured default, then the project attached to the
    Application Default Credentials (gcloud config, GOOGLE_CLOUD_PROJECT).

    Returns:
        Project ID, or an empty string if none could be determined
    """
    if settings.default_project_id:
        return settings.default_project_id

    try:
        _, project_id = google.auth.default()
    except DefaultCredentialsError as e:
        logger.debug(f"No default project from Application Default Credentials: {e}")
        return ""

    return project_id or ""


async def check_application_default_credentials(
    clients: GCPClients,
    project_id: str,
    location: str,
) -> Optional[str]:
    """
    Pre-flight check that GKE API calls can authenticate.

    Args:
        clients: API clients
        project_id: Project to query; the check is skipped when empty
        location: Location to query

    Returns:
        Instructions for the user if credentials are missing, else None
    """
    if not project_id:
        return None

    try:
        await asyncio.to_thread(
            clients.cluster_manager.get_server_config,
            name=f"projects/{project_id}/locations/{location}",
        )
    except (DefaultCredentialsError, google_exceptions.Unauthenticated) as e:
        logger.warning(f"{ADC_INSTRUCTIONS} ({e})")
        return ADC_INSTRUCTIONS
    except google_exceptions.GoogleAPIError as e:
        logger.warning(f"Credentials pre-flight check failed: {e}")

    return None
