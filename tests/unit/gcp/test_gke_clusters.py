# tests/unit/gcp/test_gke_clusters.py
"""
Unit tests for GKE cluster API wrappers and credential checks.

The generated Google clients are replaced with mocks returning real
proto messages, so no credentials or network access are needed.
"""

import json
from unittest.mock import MagicMock, patch

import pytest
from google.api_core import exceptions as google_exceptions
from google.auth.exceptions import DefaultCredentialsError
from google.cloud import container_v1

from gke_mcp.config import GCPSettings
from gke_mcp.gcp import (
    ADC_INSTRUCTIONS,
    GCPClients,
    GKEEndpointResolver,
    check_application_default_credentials,
    get_cluster,
    list_clusters,
    resolve_default_project,
)
from gke_mcp.kubeconfig import ClusterIdentity, ClusterResolutionError


def make_cluster(name="demo", endpoint="1.2.3.4", ca="Q0E=") -> container_v1.Cluster:
    return container_v1.Cluster(
        name=name,
        location="us-central1",
        endpoint=endpoint,
        master_auth=container_v1.MasterAuth(cluster_ca_certificate=ca),
    )


@pytest.fixture
def clients() -> GCPClients:
    clients = GCPClients(user_agent="gke-mcp/test")
    clients._cluster_manager = MagicMock()
    return clients


class TestListClusters:
    """Tests for list_clusters."""

    @pytest.mark.asyncio
    async def test_returns_json(self, clients):
        clients.cluster_manager.list_clusters.return_value = container_v1.ListClustersResponse(
            clusters=[make_cluster("a"), make_cluster("b")]
        )

        result = json.loads(await list_clusters(clients, "p1", "us-central1"))

        assert [c["name"] for c in result["clusters"]] == ["a", "b"]
        clients.cluster_manager.list_clusters.assert_called_once_with(
            parent="projects/p1/locations/us-central1"
        )

    @pytest.mark.asyncio
    async def test_empty_location_lists_everywhere(self, clients):
        clients.cluster_manager.list_clusters.return_value = container_v1.ListClustersResponse()

        await list_clusters(clients, "p1", "")

        clients.cluster_manager.list_clusters.assert_called_once_with(
            parent="projects/p1/locations/-"
        )


class TestGetCluster:
    """Tests for get_cluster."""

    @pytest.mark.asyncio
    async def test_returns_json(self, clients):
        clients.cluster_manager.get_cluster.return_value = make_cluster()
        identity = ClusterIdentity("p1", "us-central1", "demo")

        result = json.loads(await get_cluster(clients, identity))

        assert result["name"] == "demo"
        assert result["endpoint"] == "1.2.3.4"
        clients.cluster_manager.get_cluster.assert_called_once_with(
            name="projects/p1/locations/us-central1/clusters/demo"
        )


class TestGKEEndpointResolver:
    """Tests for resolving cluster endpoints through the GKE API."""

    @pytest.mark.asyncio
    async def test_endpoint_and_certificate(self, clients):
        clients.cluster_manager.get_cluster.return_value = make_cluster(endpoint="5.6.7.8", ca="TkVX")

        endpoint = await GKEEndpointResolver(clients).describe_endpoint(
            ClusterIdentity("p1", "us-central1", "demo")
        )

        assert endpoint.endpoint == "5.6.7.8"
        assert endpoint.ca_certificate == "TkVX"

    @pytest.mark.asyncio
    async def test_missing_fields_returned_empty(self, clients):
        """Empty fields are left for the record builder to reject."""
        clients.cluster_manager.get_cluster.return_value = container_v1.Cluster(name="demo")

        endpoint = await GKEEndpointResolver(clients).describe_endpoint(
            ClusterIdentity("p1", "us-central1", "demo")
        )

        assert endpoint.endpoint == ""
        assert endpoint.ca_certificate == ""

    @pytest.mark.asyncio
    async def test_api_error_wrapped(self, clients):
        clients.cluster_manager.get_cluster.side_effect = google_exceptions.NotFound("no such cluster")

        with pytest.raises(ClusterResolutionError, match="failed to get cluster demo"):
            await GKEEndpointResolver(clients).describe_endpoint(
                ClusterIdentity("p1", "us-central1", "demo")
            )


class TestApplicationDefaultCredentials:
    """Tests for the startup credentials check and default project."""

    @pytest.mark.asyncio
    async def test_unauthenticated_returns_instructions(self, clients):
        clients.cluster_manager.get_server_config.side_effect = google_exceptions.Unauthenticated("no creds")

        result = await check_application_default_credentials(clients, "p1", "us-central1")

        assert result == ADC_INSTRUCTIONS
        clients.cluster_manager.get_server_config.assert_called_once_with(
            name="projects/p1/locations/us-central1"
        )

    @pytest.mark.asyncio
    async def test_missing_credentials_returns_instructions(self, clients):
        clients.cluster_manager.get_server_config.side_effect = DefaultCredentialsError("none")

        assert await check_application_default_credentials(clients, "p1", "us-central1") == ADC_INSTRUCTIONS

    @pytest.mark.asyncio
    async def test_other_errors_ignored(self, clients):
        """Permission problems are not a credentials problem."""
        clients.cluster_manager.get_server_config.side_effect = google_exceptions.PermissionDenied("denied")

        assert await check_application_default_credentials(clients, "p1", "us-central1") is None

    @pytest.mark.asyncio
    async def test_success(self, clients):
        assert await check_application_default_credentials(clients, "p1", "us-central1") is None

    @pytest.mark.asyncio
    async def test_skipped_without_project(self, clients):
        assert await check_application_default_credentials(clients, "", "us-central1") is None
        clients.cluster_manager.get_server_config.assert_not_called()

    def test_configured_project_wins(self):
        with patch("google.auth.default") as default:
            assert resolve_default_project(GCPSettings(default_project_id="cfg")) == "cfg"
            default.assert_not_called()

    def test_project_from_credentials(self):
        with patch("google.auth.default", return_value=(MagicMock(), "adc-project")):
            assert resolve_default_project(GCPSettings()) == "adc-project"

    def test_no_credentials_no_project(self):
        with patch("google.auth.default", side_effect=DefaultCredentialsError("none")):
            assert resolve_default_project(GCPSettings()) == ""

    def test_credentials_without_project(self):
        with patch("google.auth.default", return_value=(MagicMock(), None)):
            assert resolve_default_project(GCPSettings()) == ""


class TestGCPClients:
    """Tests for client lifecycle."""

    def test_close_releases_clients(self, clients):
        manager = clients.cluster_manager
        clients.close()

        manager.transport.close.assert_called_once()
        assert clients._cluster_manager is None

    def test_logging_client_cached_per_project(self):
        clients = GCPClients(user_agent="gke-mcp/test")
        with patch("gke_mcp.gcp.clients.cloud_logging.Client") as client_cls:
            first = clients.logging("p1")
            assert clients.logging("p1") is first
            clients.logging("p2")

        assert client_cls.call_count == 2
        client_cls.assert_any_call(project="p1", client_info=clients.client_info)
