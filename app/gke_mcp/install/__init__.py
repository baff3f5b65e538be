"""
Installers that register the GKE MCP Server with AI tools.
"""

from gke_mcp.install.base import InstallError
from gke_mcp.install.cursor import install_cursor_extension
from gke_mcp.install.gemini import install_gemini_cli_extension

__all__ = [
    "InstallError",
    "install_cursor_extension",
    "install_gemini_cli_extension",
]
