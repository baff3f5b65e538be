"""
Merges cluster credentials into a kubeconfig document.
"""

from gke_mcp.kubeconfig.document import CredentialDocument
from gke_mcp.kubeconfig.types import ClusterEntry, ContextEntry, UserEntry


def merge_records(
    document: CredentialDocument,
    cluster: ClusterEntry,
    context: ContextEntry,
    user: UserEntry,
) -> CredentialDocument:
    """
    Upsert the three records and make their context the current one.

    Entries with the same name are replaced at their existing position;
    new names are appended. All other entries keep their order and values.
    The input document is left untouched.

    Args:
        document: Loaded kubeconfig
        cluster: Cluster entry to write
        context: Context entry to write
        user: User entry to write

    Returns:
        A new CredentialDocument
    """
    merged = document.copy()
    merged.clusters.upsert(cluster.to_dict())
    merged.contexts.upsert(context.to_dict())
    merged.users.upsert(user.to_dict())
    merged.current_context = context.name
    return merged
