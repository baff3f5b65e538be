"""
MCP tools for Google Kubernetes Engine.

Read-only tools report on clusters, recommendations and logs through
Google Cloud APIs. get_kubeconfig writes cluster credentials into the
local kubeconfig file.
"""

from fastmcp import FastMCP

from gke_mcp.tools.base import ToolContext
from gke_mcp.tools.clusters import register_cluster_tools
from gke_mcp.tools.logs import register_log_tools
from gke_mcp.tools.recommendations import register_recommendation_tools


def register_tools(mcp: FastMCP, ctx: ToolContext) -> None:
    """Register every GKE tool with the MCP server."""
    register_cluster_tools(mcp, ctx)
    register_recommendation_tools(mcp, ctx)
    register_log_tools(mcp, ctx)


__all__ = [
    "ToolContext",
    "register_tools",
    "register_cluster_tools",
    "register_log_tools",
    "register_recommendation_tools",
]
