"""
Shared state and helpers for MCP tools.
"""

from dataclasses import dataclass
from typing import Optional

from fastmcp.exceptions import ToolError
from google.api_core import exceptions as google_exceptions
from google.auth.exceptions import DefaultCredentialsError

from gke_mcp.config import GKEMCPServerConfig
from gke_mcp.gcp import GCPClients
from gke_mcp.kubeconfig import CredentialStore, EndpointResolver


# Errors from Google client libraries reported back to the caller as tool errors
GOOGLE_ERRORS = (google_exceptions.GoogleAPIError, DefaultCredentialsError)

PROJECT_ID_DESCRIPTION = "GCP project ID. Use the default if the user doesn't provide it."
LOCATION_DESCRIPTION = (
    "GKE cluster location. Leave this empty if the user doesn't provide it."
)
CLUSTER_NAME_DESCRIPTION = (
    "GKE cluster name. Do not select it yourself, make sure the user provides "
    "or confirms the cluster name."
)


@dataclass
class ToolContext:
    """
    Everything a tool needs to serve a call.

    Attributes:
        config: Server configuration
        clients: Google Cloud API clients
        store: Kubeconfig file updated by get_kubeconfig
        resolver: Cluster endpoint lookup used by get_kubeconfig
        default_project_id: Project used when a call omits project_id
    """

    config: GKEMCPServerConfig
    clients: GCPClients
    store: CredentialStore
    resolver: EndpointResolver
    default_project_id: str = ""

    @property
    def default_location(self) -> str:
        return self.config.gcp.default_location or ""

    def project(self, project_id: Optional[str]) -> str:
        """
        Resolve the project of a call.

        Raises:
            ToolError: If neither the call nor the configuration has one
        """
        project = project_id or self.default_project_id
        if not project:
            raise ToolError("project_id argument not set")
        return project


def require(value: Optional[str], argument: str) -> str:
    """Reject an empty required argument."""
    if not value:
        raise ToolError(f"{argument} argument cannot be empty")
    return value
