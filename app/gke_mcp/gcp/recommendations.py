"""
GKE recommendations from the Recommender API.
"""

import asyncio
import json

from google.cloud import recommender_v1

from gke_mcp.gcp.clients import GCPClients
from gke_mcp.utils import get_logger

logger = get_logger(__name__)

DIAGNOSIS_RECOMMENDER = "google.container.DiagnosisRecommender"


def recommender_parent(project_id: str, location: str) -> str:
    """Parent resource for GKE diagnosis recommendations."""
    return (
        f"projects/{project_id}/locations/{location or '-'}"
        f"/recommenders/{DIAGNOSIS_RECOMMENDER}"
    )


async def list_recommendations(
    clients: GCPClients, project_id: str, location: str
) -> str:
    """
    List GKE recommendations.

    Args:
        clients: API clients
        project_id: GCP project ID
        location: Region or zone, or empty for all locations

    Returns:
        JSON object with a "recommendations" list
    """
    parent = recommender_parent(project_id, location)
    logger.info(f"Listing recommendations for {parent}")

    def fetch() -> list[dict]:
        pager = clients.recommender.list_recommendations(parent=parent)
        return [
            recommender_v1.Recommendation.to_dict(
                recommendation, preserving_proto_field_name=False
            )
            for recommendation in pager
        ]

    recommendations = await asyncio.to_thread(fetch)
    return json.dumps({"recommendations": recommendations}, indent=2)
