# tests/unit/kubeconfig/test_synthesizer.py
"""
Unit tests for the write_cluster_credentials pipeline.
"""

import asyncio
import os

import pytest
import yaml

from conftest import CA_CERTIFICATE, FakeResolver
from gke_mcp.kubeconfig import (
    ClusterIdentity,
    ClusterResolutionError,
    KubeconfigParseError,
    KubeconfigValidationError,
    MissingCertificateError,
    MissingEndpointError,
    write_cluster_credentials,
)


class TestWriteClusterCredentials:
    """End-to-end tests against a temporary kubeconfig file."""

    @pytest.mark.asyncio
    async def test_new_cluster(self, resolver, store, identity, kubeconfig_path):
        """p1/us-central1/demo lands in a fresh kubeconfig and becomes current."""
        result = await write_cluster_credentials(resolver, store, identity)

        name = "gke_p1_us-central1_demo"
        assert result.context_name == name
        assert result.path == kubeconfig_path
        assert resolver.calls == [identity]

        data = yaml.safe_load(kubeconfig_path.read_text())
        assert data["current-context"] == name
        assert data["clusters"] == [{
            "name": name,
            "cluster": {
                "certificate-authority-data": CA_CERTIFICATE,
                "server": "https://1.2.3.4",
            },
        }]
        assert data["contexts"] == [
            {"name": name, "context": {"cluster": name, "user": name}},
        ]
        assert data["users"][0]["user"]["exec"]["command"] == "gke-gcloud-auth-plugin"

    @pytest.mark.asyncio
    async def test_message(self, resolver, store, identity, kubeconfig_path):
        result = await write_cluster_credentials(resolver, store, identity)

        assert result.message() == (
            "Kubeconfig for cluster demo (Project: p1, Location: us-central1) "
            f"successfully appended/updated in {kubeconfig_path}. "
            "Current context set to gke_p1_us-central1_demo."
        )

    @pytest.mark.asyncio
    async def test_repeat_is_byte_identical(self, resolver, store, identity, kubeconfig_path):
        await write_cluster_credentials(resolver, store, identity)
        first = kubeconfig_path.read_bytes()
        await write_cluster_credentials(resolver, store, identity)

        assert kubeconfig_path.read_bytes() == first

    @pytest.mark.asyncio
    async def test_second_cluster_appended(self, resolver, store, identity, kubeconfig_path):
        other = ClusterIdentity("p1", "europe-west1", "prod")
        await write_cluster_credentials(resolver, store, identity)
        await write_cluster_credentials(FakeResolver(endpoint="9.9.9.9"), store, other)

        data = yaml.safe_load(kubeconfig_path.read_text())
        assert [c["name"] for c in data["clusters"]] == [
            "gke_p1_us-central1_demo",
            "gke_p1_europe-west1_prod",
        ]
        assert data["current-context"] == "gke_p1_europe-west1_prod"

    @pytest.mark.asyncio
    async def test_endpoint_change_updates_in_place(self, store, identity, kubeconfig_path):
        await write_cluster_credentials(FakeResolver(endpoint="1.1.1.1"), store, identity)
        await write_cluster_credentials(FakeResolver(endpoint="2.2.2.2"), store, identity)

        data = yaml.safe_load(kubeconfig_path.read_text())
        assert len(data["clusters"]) == 1
        assert data["clusters"][0]["cluster"]["server"] == "https://2.2.2.2"

    @pytest.mark.asyncio
    async def test_empty_certificate_leaves_file_untouched(self, store, identity, kubeconfig_path):
        kubeconfig_path.parent.mkdir(parents=True)
        kubeconfig_path.write_text("current-context: keep\n")
        before = os.stat(kubeconfig_path).st_mtime_ns

        with pytest.raises(MissingCertificateError, match="clusterCaCertificate not found"):
            await write_cluster_credentials(FakeResolver(ca_certificate=""), store, identity)

        assert kubeconfig_path.read_text() == "current-context: keep\n"
        assert os.stat(kubeconfig_path).st_mtime_ns == before

    @pytest.mark.asyncio
    async def test_empty_endpoint_creates_nothing(self, store, identity, kubeconfig_path):
        with pytest.raises(MissingEndpointError):
            await write_cluster_credentials(FakeResolver(endpoint=""), store, identity)

        assert not kubeconfig_path.exists()

    @pytest.mark.asyncio
    async def test_resolver_failure_wrapped(self, store, identity, kubeconfig_path):
        resolver = FakeResolver(error=RuntimeError("permission denied"))

        with pytest.raises(ClusterResolutionError, match="failed to get cluster demo: permission denied"):
            await write_cluster_credentials(resolver, store, identity)
        assert not kubeconfig_path.exists()

    @pytest.mark.asyncio
    async def test_resolver_kubeconfig_error_passes_through(self, store, identity):
        error = ClusterResolutionError("not found")
        with pytest.raises(ClusterResolutionError, match="^not found$"):
            await write_cluster_credentials(FakeResolver(error=error), store, identity)

    @pytest.mark.asyncio
    async def test_invalid_identity_never_resolves(self, resolver, store):
        with pytest.raises(KubeconfigValidationError, match="location argument cannot be empty"):
            await write_cluster_credentials(resolver, store, ClusterIdentity("p1", "", "demo"))
        assert resolver.calls == []

    @pytest.mark.asyncio
    async def test_unparsable_kubeconfig_not_overwritten(self, resolver, store, identity, kubeconfig_path):
        kubeconfig_path.parent.mkdir(parents=True)
        kubeconfig_path.write_text("clusters: [\n")

        with pytest.raises(KubeconfigParseError):
            await write_cluster_credentials(resolver, store, identity)
        assert kubeconfig_path.read_text() == "clusters: [\n"

    @pytest.mark.asyncio
    async def test_cancelled_lookup_writes_nothing(self, store, identity, kubeconfig_path):
        resolver = FakeResolver(error=asyncio.CancelledError())

        with pytest.raises(asyncio.CancelledError):
            await write_cluster_credentials(resolver, store, identity)
        assert not kubeconfig_path.exists()

    @pytest.mark.asyncio
    async def test_documented_scenario(self, store, identity, kubeconfig_path):
        """p1/us-central1/demo with endpoint 10.0.0.1 and certificate BASE64CERT."""
        resolver = FakeResolver(endpoint="10.0.0.1", ca_certificate="BASE64CERT")
        await write_cluster_credentials(resolver, store, identity)

        data = yaml.safe_load(kubeconfig_path.read_text())
        assert data["clusters"] == [{
            "name": "gke_p1_us-central1_demo",
            "cluster": {
                "certificate-authority-data": "BASE64CERT",
                "server": "https://10.0.0.1",
            },
        }]
        assert data["current-context"] == "gke_p1_us-central1_demo"
        assert data["apiVersion"] == "v1"
        assert data["kind"] == "Config"
        assert len(data["contexts"]) == 1
        assert len(data["users"]) == 1
