"""
Builds the kubeconfig records for a GKE cluster.
"""

from typing import NamedTuple

from gke_mcp.kubeconfig.types import (
    ClusterEndpoint,
    ClusterEntry,
    ClusterIdentity,
    ContextEntry,
    ExecConfig,
    MissingCertificateError,
    MissingEndpointError,
    UserEntry,
)


SECURE_SCHEME = "https://"
INSECURE_SCHEME = "http://"


class CredentialRecords(NamedTuple):
    """The three kubeconfig entries written for one cluster."""

    cluster: ClusterEntry
    context: ContextEntry
    user: UserEntry


def context_name(identity: ClusterIdentity) -> str:
    """
    Name shared by the cluster, context and user entries.

    Follows the gcloud naming convention so that credentials written here
    and by ``gcloud container clusters get-credentials`` target the same
    entries.
    """
    identity.validate()
    return f"gke_{identity.project_id}_{identity.location}_{identity.name}"


def normalize_server(endpoint: str) -> str:
    """Return the endpoint as an https URL."""
    if endpoint.startswith(SECURE_SCHEME):
        return endpoint
    if endpoint.startswith(INSECURE_SCHEME):
        return SECURE_SCHEME + endpoint[len(INSECURE_SCHEME):]
    return SECURE_SCHEME + endpoint


def build_records(
    identity: ClusterIdentity, endpoint: ClusterEndpoint
) -> CredentialRecords:
    """
    Build the cluster, context and user entries for a resolved cluster.

    Args:
        identity: Cluster the records are for
        endpoint: Endpoint and CA certificate returned by the resolver

    Returns:
        CredentialRecords sharing one name

    Raises:
        MissingCertificateError: If the CA certificate is empty
        MissingEndpointError: If the endpoint is empty
    """
    if not endpoint.ca_certificate:
        raise MissingCertificateError(
            f"clusterCaCertificate not found for cluster {identity.name}",
            identity=identity,
        )
    if not endpoint.endpoint:
        raise MissingEndpointError(
            f"endpoint not found for cluster {identity.name}",
            identity=identity,
        )

    name = context_name(identity)
    return CredentialRecords(
        cluster=ClusterEntry(
            name=name,
            server=normalize_server(endpoint.endpoint),
            certificate_authority_data=endpoint.ca_certificate,
        ),
        context=ContextEntry(name=name, cluster=name, user=name),
        user=UserEntry(name=name, exec_config=ExecConfig()),
    )
