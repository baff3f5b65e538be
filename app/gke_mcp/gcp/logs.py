"""
Cloud Logging queries for GKE clusters.

Also provides a catalog of sample Logging Query Language (LQL) queries
for common GKE scenarios, loaded from ``data/log_query_samples.yaml``.
"""

import asyncio
import json
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from functools import lru_cache
from pathlib import Path
from typing import Optional

import yaml

from gke_mcp.gcp.clients import GCPClients
from gke_mcp.utils import get_logger

logger = get_logger(__name__)

SAMPLES_PATH = Path(__file__).parent / "data" / "log_query_samples.yaml"


@dataclass(frozen=True)
class SampleQuery:
    """A sample LQL query."""

    name: str
    description: str
    query: str
    category: str

    def to_dict(self) -> dict[str, str]:
        return {
            "name": self.name,
            "description": self.description,
            "query": self.query,
            "category": self.category,
        }


def build_filter(params: dict[str, str]) -> str:
    """
    Convert label/value pairs into an LQL filter joined with AND.

    Values are quoted with JSON string escaping.
    """
    return " AND ".join(f"{key} = {json.dumps(value)}" for key, value in params.items())


def filter_for_cluster(name: str, location: str) -> str:
    """LQL filter matching telemetry of one cluster."""
    return build_filter(
        {
            "resource.labels.location": location,
            "resource.labels.cluster_name": name,
        }
    )


def cluster_logs_filter(name: str, location: str, since: datetime) -> str:
    """LQL filter for a cluster's log entries newer than since."""
    timestamp = since.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
    return f'{filter_for_cluster(name, location)} AND timestamp > "{timestamp}"'


async def list_logs(
    clients: GCPClients,
    project_id: str,
    location: str,
    cluster_name: str,
    lookback_hours: int,
    max_entries: int,
    now: Optional[datetime] = None,
) -> str:
    """
    Read recent log entries of a cluster.

    Args:
        clients: API clients
        project_id: Project that owns the logs
        location: Cluster location
        cluster_name: Cluster name
        lookback_hours: How far back to read
        max_entries: Maximum number of entries returned
        now: Reference time (defaults to the current time)

    Returns:
        Log entries as JSON objects, one after another
    """
    since = (now or datetime.now(timezone.utc)) - timedelta(hours=lookback_hours)
    log_filter = cluster_logs_filter(cluster_name, location, since)
    logger.info(f"Listing logs in project {project_id} with filter: {log_filter}")

    def fetch() -> list[dict]:
        entries = clients.logging(project_id).list_entries(
            resource_names=[f"projects/{project_id}"],
            filter_=log_filter,
            max_results=max_entries,
        )
        return [entry.to_api_repr() for entry in entries]

    entries = await asyncio.to_thread(fetch)
    return "\n".join(json.dumps(entry, indent=2, default=str) for entry in entries)


@lru_cache(maxsize=1)
def load_sample_queries() -> tuple[SampleQuery, ...]:
    """Load the sample query catalog."""
    with open(SAMPLES_PATH) as f:
        data = yaml.safe_load(f)

    return tuple(
        SampleQuery(
            name=item["name"],
            description=item["description"],
            query=item["query"],
            category=item["category"],
        )
        for item in data.get("samples", [])
    )


def get_sample_queries(category: Optional[str] = None) -> list[SampleQuery]:
    """
    Get sample queries, optionally limited to one category.

    Args:
        category: e.g. "Cluster", "Pod", "Node", "Container",
                  "Control Plane" or "Namespace"
    """
    samples = load_sample_queries()
    if not category:
        return list(samples)
    return [sample for sample in samples if sample.category == category]


def sample_categories() -> list[str]:
    """Categories present in the catalog, in catalog order."""
    return list(dict.fromkeys(sample.category for sample in load_sample_queries()))
