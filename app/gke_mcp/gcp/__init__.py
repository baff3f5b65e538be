"""
Google Cloud API access for GKE.

Thin wrappers over the GKE (Container), Recommender and Cloud Logging
APIs. Blocking client calls run in worker threads.
"""

from gke_mcp.gcp.clients import (
    ADC_INSTRUCTIONS,
    GCPClients,
    check_application_default_credentials,
    resolve_default_project,
)
from gke_mcp.gcp.clusters import (
    GKEEndpointResolver,
    get_cluster,
    list_clusters,
)
from gke_mcp.gcp.recommendations import list_recommendations, recommender_parent
from gke_mcp.gcp.logs import (
    SampleQuery,
    build_filter,
    cluster_logs_filter,
    filter_for_cluster,
    get_sample_queries,
    list_logs,
    sample_categories,
)

__all__ = [
    # Clients
    "ADC_INSTRUCTIONS",
    "GCPClients",
    "check_application_default_credentials",
    "resolve_default_project",
    # Clusters
    "GKEEndpointResolver",
    "get_cluster",
    "list_clusters",
    # Recommendations
    "list_recommendations",
    "recommender_parent",
    # Logs
    "SampleQuery",
    "build_filter",
    "cluster_logs_filter",
    "filter_for_cluster",
    "get_sample_queries",
    "list_logs",
    "sample_categories",
]
