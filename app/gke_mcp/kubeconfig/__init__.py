"""
Kubeconfig synthesis for GKE clusters.

Builds the cluster, context and user entries for a GKE cluster, merges
them into an existing kubeconfig file and makes the cluster the current
context.
"""

from gke_mcp.kubeconfig.types import (
    ClusterEndpoint,
    ClusterEntry,
    ClusterIdentity,
    ContextEntry,
    ExecConfig,
    UserEntry,
    ClusterResolutionError,
    KubeconfigError,
    KubeconfigIOError,
    KubeconfigParseError,
    KubeconfigValidationError,
    MissingCertificateError,
    MissingEndpointError,
)
from gke_mcp.kubeconfig.document import CredentialDocument, NamedEntries
from gke_mcp.kubeconfig.builder import (
    CredentialRecords,
    build_records,
    context_name,
    normalize_server,
)
from gke_mcp.kubeconfig.merge import merge_records
from gke_mcp.kubeconfig.store import (
    CredentialStore,
    parse_document,
    serialize_document,
)
from gke_mcp.kubeconfig.synthesizer import (
    EndpointResolver,
    KubeconfigWriteResult,
    write_cluster_credentials,
)

__all__ = [
    # Types
    "ClusterEndpoint",
    "ClusterEntry",
    "ClusterIdentity",
    "ContextEntry",
    "ExecConfig",
    "UserEntry",
    "CredentialDocument",
    "NamedEntries",
    "CredentialRecords",
    # Exceptions
    "KubeconfigError",
    "KubeconfigValidationError",
    "MissingEndpointError",
    "MissingCertificateError",
    "ClusterResolutionError",
    "KubeconfigIOError",
    "KubeconfigParseError",
    # Builder
    "build_records",
    "context_name",
    "normalize_server",
    # Merge
    "merge_records",
    # Store
    "CredentialStore",
    "parse_document",
    "serialize_document",
    # Pipeline
    "EndpointResolver",
    "KubeconfigWriteResult",
    "write_cluster_credentials",
]
