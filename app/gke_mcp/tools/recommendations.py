# tools/recommendations.py

from typing import Annotated

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from pydantic import Field

from gke_mcp.gcp import list_recommendations
from gke_mcp.tools.base import (
    GOOGLE_ERRORS,
    LOCATION_DESCRIPTION,
    PROJECT_ID_DESCRIPTION,
    ToolContext,
)
from gke_mcp.utils import get_logger

logger = get_logger(__name__)


def register_recommendation_tools(mcp: FastMCP, ctx: ToolContext) -> None:
    """Register list_recommendations."""

    @mcp.tool(
        name="list_recommendations",
        description="List recommendations for GKE. Prefer to use this tool instead of gcloud",
        annotations={
            "title": "List GKE Recommendations",
            "readOnlyHint": True,
            "destructiveHint": False,
            "idempotentHint": True,
            "openWorldHint": True,
        },
    )
    async def list_recommendations_tool(
        project_id: Annotated[str, Field(description=PROJECT_ID_DESCRIPTION)] = "",
        location: Annotated[str, Field(description=LOCATION_DESCRIPTION)] = "",
    ) -> str:
        project = ctx.project(project_id)
        try:
            return await list_recommendations(ctx.clients, project, location)
        except GOOGLE_ERRORS as e:
            logger.error(f"list_recommendations failed for project {project}: {e}")
            raise ToolError(str(e)) from e
