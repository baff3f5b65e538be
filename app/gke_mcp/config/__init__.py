"""
Configuration system for the GKE MCP Server.

Exports:
    GKEMCPServerConfig: Main configuration container
    load_config: Load configuration from YAML/env
"""

from gke_mcp.config.models import (
    GKEMCPServerConfig,
    ServerSettings,
    GCPSettings,
    KubeconfigSettings,
    LogsSettings,
)
from gke_mcp.config.loader import load_config

__all__ = [
    "GKEMCPServerConfig",
    "ServerSettings",
    "GCPSettings",
    "KubeconfigSettings",
    "LogsSettings",
    "load_config",
]
