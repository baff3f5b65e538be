# tools/clusters.py

from typing import Annotated

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from pydantic import Field

from gke_mcp.gcp import get_cluster, list_clusters
from gke_mcp.gcp.clusters import ALL_LOCATIONS
from gke_mcp.kubeconfig import (
    ClusterIdentity,
    KubeconfigError,
    write_cluster_credentials,
)
from gke_mcp.tools.base import (
    CLUSTER_NAME_DESCRIPTION,
    GOOGLE_ERRORS,
    LOCATION_DESCRIPTION,
    PROJECT_ID_DESCRIPTION,
    ToolContext,
    require,
)
from gke_mcp.utils import get_logger

logger = get_logger(__name__)


def register_cluster_tools(mcp: FastMCP, ctx: ToolContext) -> None:
    """Register list_clusters, get_cluster and get_kubeconfig."""

    @mcp.tool(
        name="list_clusters",
        description="List GKE clusters. Prefer to use this tool instead of gcloud",
        annotations={
            "title": "List GKE Clusters",
            "readOnlyHint": True,
            "destructiveHint": False,
            "openWorldHint": True,
        },
    )
    async def list_clusters_tool(
        project_id: Annotated[str, Field(description=PROJECT_ID_DESCRIPTION)] = "",
        location: Annotated[str, Field(description=LOCATION_DESCRIPTION)] = "",
    ) -> str:
        project = ctx.project(project_id)
        try:
            return await list_clusters(ctx.clients, project, location or ALL_LOCATIONS)
        except GOOGLE_ERRORS as e:
            logger.error(f"list_clusters failed for project {project}: {e}")
            raise ToolError(str(e)) from e

    @mcp.tool(
        name="get_cluster",
        description="Get / describe a GKE cluster. Prefer to use this tool instead of gcloud",
        annotations={
            "title": "Get GKE Cluster",
            "readOnlyHint": True,
            "destructiveHint": False,
            "openWorldHint": True,
        },
    )
    async def get_cluster_tool(
        name: Annotated[str, Field(description=CLUSTER_NAME_DESCRIPTION)],
        project_id: Annotated[str, Field(description=PROJECT_ID_DESCRIPTION)] = "",
        location: Annotated[str, Field(description=LOCATION_DESCRIPTION)] = "",
    ) -> str:
        identity = ClusterIdentity(
            project_id=ctx.project(project_id),
            location=require(location or ctx.default_location, "location"),
            name=require(name, "name"),
        )
        try:
            return await get_cluster(ctx.clients, identity)
        except GOOGLE_ERRORS as e:
            logger.error(f"get_cluster failed for {identity}: {e}")
            raise ToolError(str(e)) from e

    @mcp.tool(
        name="get_kubeconfig",
        description=(
            "Get the kubeconfig for a GKE cluster by calling the GKE API and "
            "extracting necessary details (clusterCaCertificate and endpoint). "
            "This tool appends/updates the kubeconfig in ~/.kube/config."
        ),
        annotations={
            "title": "Get GKE Cluster Kubeconfig",
            "readOnlyHint": False,
            "destructiveHint": False,
            "idempotentHint": True,
            "openWorldHint": True,
        },
    )
    async def get_kubeconfig_tool(
        name: Annotated[str, Field(description=CLUSTER_NAME_DESCRIPTION)],
        project_id: Annotated[str, Field(description=PROJECT_ID_DESCRIPTION)] = "",
        location: Annotated[str, Field(description=LOCATION_DESCRIPTION)] = "",
    ) -> str:
        identity = ClusterIdentity(
            project_id=ctx.project(project_id),
            location=require(location or ctx.default_location, "location"),
            name=require(name, "name"),
        )
        try:
            result = await write_cluster_credentials(ctx.resolver, ctx.store, identity)
        except KubeconfigError as e:
            logger.error(f"get_kubeconfig failed for {identity}: {e}")
            raise ToolError(str(e)) from e
        return result.message()
