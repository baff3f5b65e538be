"""
Kubeconfig synthesis pipeline.

Resolve -> Build -> Load -> Merge -> Write. Each stage raises on failure
and nothing is written unless every earlier stage succeeded. Resolving
the cluster endpoint is the only step that awaits, so a cancelled call
never touches the file.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from gke_mcp.kubeconfig.builder import build_records
from gke_mcp.kubeconfig.store import CredentialStore
from gke_mcp.kubeconfig.types import (
    ClusterEndpoint,
    ClusterIdentity,
    ClusterResolutionError,
    KubeconfigError,
)
from gke_mcp.utils import get_logger

logger = get_logger(__name__)


class EndpointResolver(Protocol):
    """Looks up the API server endpoint and CA certificate of a cluster."""

    async def describe_endpoint(self, identity: ClusterIdentity) -> ClusterEndpoint:
        ...


@dataclass(frozen=True)
class KubeconfigWriteResult:
    """Outcome of a successful kubeconfig write."""

    identity: ClusterIdentity
    context_name: str
    path: Path

    def message(self) -> str:
        """Confirmation text shown to the caller."""
        return (
            f"Kubeconfig for cluster {self.identity.name} "
            f"(Project: {self.identity.project_id}, Location: {self.identity.location}) "
            f"successfully appended/updated in {self.path}. "
            f"Current context set to {self.context_name}."
        )


async def write_cluster_credentials(
    resolver: EndpointResolver,
    store: CredentialStore,
    identity: ClusterIdentity,
) -> KubeconfigWriteResult:
    """
    Write kubeconfig entries for a cluster and make it the current context.

    Args:
        resolver: Source of the cluster endpoint and CA certificate
        store: Kubeconfig file to update
        identity: Cluster to add

    Returns:
        KubeconfigWriteResult naming the written context and file

    Raises:
        KubeconfigValidationError: If an identity field is empty, or the
            resolver returned no endpoint or certificate
        ClusterResolutionError: If the resolver failed
        KubeconfigIOError: If the file cannot be read or written
        KubeconfigParseError: If the existing file cannot be parsed
    """
    identity.validate()

    try:
        endpoint = await resolver.describe_endpoint(identity)
    except KubeconfigError:
        raise
    except Exception as e:
        raise ClusterResolutionError(
            f"failed to get cluster {identity.name}: {e}", identity=identity
        ) from e

    records = build_records(identity, endpoint)
    path = store.upsert_cluster(identity, *records)

    return KubeconfigWriteResult(
        identity=identity,
        context_name=records.context.name,
        path=path,
    )
