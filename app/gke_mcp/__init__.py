"""
GKE MCP Server.

This MCP server lets AI agents inspect Google Kubernetes Engine clusters
(clusters, recommendations, logs) and write cluster credentials into the
local kubeconfig so kubectl can reach them.
"""

__version__ = "0.1.0"
