"""
Pytest configuration and shared fixtures.
"""

import sys
from pathlib import Path

import pytest


# Add app directory to path
APP_DIR = Path(__file__).parent.parent / "app"
sys.path.insert(0, str(APP_DIR))

from gke_mcp.kubeconfig import (  # noqa: E402
    ClusterEndpoint,
    ClusterIdentity,
    CredentialStore,
)


CA_CERTIFICATE = "LS0tLS1CRUdJTiBDRVJUSUZJQ0FURS0tLS0tCg=="


class FakeResolver:
    """Endpoint resolver returning canned answers, recording every lookup."""

    def __init__(self, endpoint: str = "1.2.3.4", ca_certificate: str = CA_CERTIFICATE,
                 error: Exception | None = None):
        self.endpoint = endpoint
        self.ca_certificate = ca_certificate
        self.error = error
        self.calls: list[ClusterIdentity] = []

    async def describe_endpoint(self, identity: ClusterIdentity) -> ClusterEndpoint:
        self.calls.append(identity)
        if self.error is not None:
            raise self.error
        return ClusterEndpoint(endpoint=self.endpoint, ca_certificate=self.ca_certificate)


def pytest_configure(config):
    """Configure pytest."""
    config.addinivalue_line(
        "markers", "asyncio: mark test as an async test"
    )


@pytest.fixture
def kubeconfig_path(tmp_path: Path) -> Path:
    """Kubeconfig location inside a temporary home directory."""
    return tmp_path / "home" / ".kube" / "config"


@pytest.fixture
def store(kubeconfig_path: Path) -> CredentialStore:
    return CredentialStore(kubeconfig_path)


@pytest.fixture
def identity() -> ClusterIdentity:
    return ClusterIdentity(project_id="p1", location="us-central1", name="demo")


@pytest.fixture
def resolver() -> FakeResolver:
    return FakeResolver()
