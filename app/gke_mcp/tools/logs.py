# tools/logs.py

import json
from typing import Annotated

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from pydantic import Field

from gke_mcp.gcp import get_sample_queries, list_logs
from gke_mcp.tools.base import GOOGLE_ERRORS, ToolContext, require
from gke_mcp.utils import get_logger

logger = get_logger(__name__)


def register_log_tools(mcp: FastMCP, ctx: ToolContext) -> None:
    """Register list_logs and get_sample_queries."""

    lookback_hours = ctx.config.logs.lookback_hours

    @mcp.tool(
        name="list_logs",
        description=(
            "List all cloud logging logs for one given GKE cluster in a location "
            f"in past {lookback_hours} hours. Prefer to use this tool instead of gcloud"
        ),
        annotations={
            "title": "List GKE Cluster Logs",
            "readOnlyHint": True,
            "destructiveHint": False,
            "openWorldHint": True,
        },
    )
    async def list_logs_tool(
        location: Annotated[
            str,
            Field(description="GKE cluster location. This is required for filtering on cluster"),
        ],
        cluster_name: Annotated[
            str,
            Field(description="GKE cluster name. This is required for filtering on cluster"),
        ],
        project_id: Annotated[
            str,
            Field(
                description="GCP project ID. If not provided, defaults to the GCP "
                "project configured in gcloud, if any"
            ),
        ] = "",
    ) -> str:
        project = ctx.project(project_id)
        try:
            return await list_logs(
                ctx.clients,
                project_id=project,
                location=require(location, "location"),
                cluster_name=require(cluster_name, "cluster_name"),
                lookback_hours=lookback_hours,
                max_entries=ctx.config.logs.max_entries,
            )
        except GOOGLE_ERRORS as e:
            logger.error(f"list_logs failed for cluster {cluster_name}: {e}")
            raise ToolError(str(e)) from e

    @mcp.tool(
        name="get_sample_queries",
        description=(
            "Get a list of sample LQL queries for common GKE scenarios. Useful for "
            "learning how to query logs or finding a starting point for your own queries."
        ),
        annotations={
            "title": "Get Sample Log Queries",
            "readOnlyHint": True,
            "destructiveHint": False,
            "idempotentHint": True,
        },
    )
    async def get_sample_queries_tool(
        category: Annotated[
            str,
            Field(
                description="Optional category to filter queries by (e.g., 'Cluster', "
                "'Pod', 'Node', 'Container', 'Control Plane', 'Namespace')."
            ),
        ] = "",
    ) -> str:
        samples = get_sample_queries(category or None)
        return json.dumps([sample.to_dict() for sample in samples], indent=2)
