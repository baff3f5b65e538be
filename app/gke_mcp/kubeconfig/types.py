"""
Type definitions for kubeconfig synthesis.

This module defines the records written into a kubeconfig file for a
GKE cluster, the cluster identity they are derived from, and the
exceptions raised by the synthesis pipeline.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional


DEFAULT_API_VERSION = "v1"
DEFAULT_KIND = "Config"

EXEC_API_VERSION = "client.authentication.k8s.io/v1beta1"
AUTH_PLUGIN_COMMAND = "gke-gcloud-auth-plugin"
AUTH_PLUGIN_INSTALL_HINT = (
    "Install gke-gcloud-auth-plugin for use with kubectl by following "
    "https://cloud.google.com/kubernetes-engine/docs/how-to/cluster-access-for-kubectl#install_plugin"
)


@dataclass(frozen=True)
class ClusterIdentity:
    """
    Identity of a GKE cluster.

    Attributes:
        project_id: GCP project ID
        location: Region or zone of the cluster
        name: Cluster name
    """

    project_id: str
    location: str
    name: str

    @property
    def resource_name(self) -> str:
        """Full resource name used by the GKE API."""
        return f"projects/{self.project_id}/locations/{self.location}/clusters/{self.name}"

    def validate(self) -> None:
        """
        Ensure every identity field is set.

        Raises:
            KubeconfigValidationError: If a field is empty
        """
        for field_name in ("project_id", "location", "name"):
            if not getattr(self, field_name):
                raise KubeconfigValidationError(
                    f"{field_name} argument cannot be empty", identity=self
                )

    def __str__(self) -> str:
        return self.resource_name


@dataclass(frozen=True)
class ClusterEndpoint:
    """Connection details returned by an endpoint resolver."""

    endpoint: str
    ca_certificate: str


@dataclass(frozen=True)
class ExecConfig:
    """Exec credential plugin invoked by the Kubernetes client."""

    api_version: str = EXEC_API_VERSION
    command: str = AUTH_PLUGIN_COMMAND
    install_hint: str = AUTH_PLUGIN_INSTALL_HINT
    provide_cluster_info: bool = True

    def to_dict(self) -> dict[str, Any]:
        return {
            "apiVersion": self.api_version,
            "command": self.command,
            "installHint": self.install_hint,
            "provideClusterInfo": self.provide_cluster_info,
        }


@dataclass(frozen=True)
class ClusterEntry:
    """A named cluster: API server address and its CA bundle."""

    name: str
    server: str
    certificate_authority_data: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "cluster": {
                "certificate-authority-data": self.certificate_authority_data,
                "server": self.server,
            },
        }


@dataclass(frozen=True)
class ContextEntry:
    """A named context binding a cluster to a user."""

    name: str
    cluster: str
    user: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "context": {
                "cluster": self.cluster,
                "user": self.user,
            },
        }


@dataclass(frozen=True)
class UserEntry:
    """A named user authenticating through an exec plugin."""

    name: str
    exec_config: ExecConfig = ExecConfig()

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "user": {
                "exec": self.exec_config.to_dict(),
            },
        }


class KubeconfigError(Exception):
    """Base exception for kubeconfig synthesis errors."""

    def __init__(
        self,
        message: str,
        path: Optional[Path] = None,
        identity: Optional[ClusterIdentity] = None,
    ):
        super().__init__(message)
        self.path = path
        self.identity = identity


class KubeconfigValidationError(KubeconfigError):
    """Raised when a required input is missing."""

    pass


class MissingEndpointError(KubeconfigValidationError):
    """Raised when the resolver returned no API server endpoint."""

    pass


class MissingCertificateError(KubeconfigValidationError):
    """Raised when the resolver returned no cluster CA certificate."""

    pass


class ClusterResolutionError(KubeconfigError):
    """Raised when the cluster endpoint could not be resolved."""

    pass


class KubeconfigIOError(KubeconfigError):
    """Raised when the kubeconfig file cannot be read or written."""

    pass


class KubeconfigParseError(KubeconfigError):
    """Raised when an existing kubeconfig file cannot be parsed."""

    pass
